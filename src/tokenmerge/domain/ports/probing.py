"""Port for bounded reachability checks against external URLs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType


class ProbeFailedError(RuntimeError):
    """Raised when a probe request could not be completed at the transport level."""


@dataclass(slots=True, frozen=True)
class ProbeResponse:
    status_code: int
    body: bytes = b""


@runtime_checkable
class UrlProbe(Protocol):
    """Async HEAD/GET capability used by content verification."""

    async def __aenter__(self) -> UrlProbe: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def head(self, url: str) -> ProbeResponse: ...

    async def get(self, url: str) -> ProbeResponse: ...


UrlProbeFactory: TypeAlias = Callable[[], UrlProbe]


__all__ = ["ProbeFailedError", "ProbeResponse", "UrlProbe", "UrlProbeFactory"]
