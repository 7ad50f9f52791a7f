"""httpx-backed implementation of the ``UrlProbe`` port."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from tokenmerge.adapters.http_resilience import RateLimit, ResilienceConfig, ResilientClient
from tokenmerge.config.review import VERIFICATION_TIMEOUT_SECONDS
from tokenmerge.domain.ports.probing import ProbeFailedError, ProbeResponse, UrlProbe

if TYPE_CHECKING:
    from types import TracebackType

USER_AGENT = "tokenmerge-verifier/0.1"


def default_probe_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="probe",
        timeout_seconds=VERIFICATION_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=8, per_seconds=1.0),
        default_headers={"User-Agent": USER_AGENT},
    )


class HttpxUrlProbe:
    """Issue HEAD/GET requests and report status code and body."""

    def __init__(self, client: ResilientClient | None = None) -> None:
        self._client = client or ResilientClient(default_probe_resilience())

    async def __aenter__(self) -> HttpxUrlProbe:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._client.aclose()

    async def head(self, url: str) -> ProbeResponse:
        return await self._probe("HEAD", url)

    async def get(self, url: str) -> ProbeResponse:
        return await self._probe("GET", url)

    async def _probe(self, method: str, url: str) -> ProbeResponse:
        try:
            response = await self._client.request(method, url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ProbeFailedError(str(exc) or type(exc).__name__) from exc
        return ProbeResponse(status_code=response.status_code, body=response.content)


if TYPE_CHECKING:
    _probe_check: UrlProbe = HttpxUrlProbe()
