"""Port for the working copy of the registry repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tokenmerge.domain.model import TokenList


class WorkspaceError(RuntimeError):
    """Raised when the registry checkout cannot be read or written."""


@runtime_checkable
class RegistryWorkspace(Protocol):
    """File-system view of the registry checkout."""

    def load_tokenlist(self) -> TokenList: ...

    def write_tokenlist(self, tokenlist: TokenList) -> None: ...

    def write_asset(self, path: str, content: bytes) -> None: ...

    def remove_asset(self, path: str) -> None: ...


__all__ = ["RegistryWorkspace", "WorkspaceError"]
