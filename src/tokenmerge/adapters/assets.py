"""Download newly added logo assets from the submission's head revision."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from tokenmerge.adapters.http_resilience import ResilienceConfig, ResilientClient
from tokenmerge.config.github import DEFAULT_OWNER, DEFAULT_REPO
from tokenmerge.config.review import ReviewConfig
from tokenmerge.domain.errors import AssetTooLargeError, VerificationError
from tokenmerge.domain.ports.hosting import AssetFetcher

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokenmerge.domain.review_pipeline.context import Submission

log = getLogger(__name__)

ASSET_TIMEOUT_SECONDS = 30.0


def _default_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="assets", timeout_seconds=ASSET_TIMEOUT_SECONDS)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpAssetFetcher:
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    config: ReviewConfig = field(default_factory=ReviewConfig)
    resilience: ResilienceConfig = field(default_factory=_default_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def asset_url(self, submission: Submission, asset: str) -> str:
        if submission.head_sha is None:
            raise VerificationError(f"missing head revision for PR #{submission.number}")
        return (
            f"{self.config.raw_content_base_url}{self.owner}/{self.repo}/"
            f"{submission.head_sha}/{asset}"
        )

    def fetch_assets(self, submission: Submission, assets: Sequence[str]) -> dict[str, bytes]:
        if not assets:
            return {}
        return asyncio.run(self._fetch_assets_async(submission, assets))

    async def _fetch_assets_async(
        self, submission: Submission, assets: Sequence[str]
    ) -> dict[str, bytes]:
        fetched: dict[str, bytes] = {}
        async with self.client_factory(self.resilience) as client:
            for asset in assets:
                fetched[asset] = await self._fetch_asset(
                    client, asset, self.asset_url(submission, asset)
                )
        return fetched

    async def _fetch_asset(self, client: ResilientClient, asset: str, uri: str) -> bytes:
        log.debug("downloading asset %s", uri)
        content = bytearray()
        try:
            async with client.stream("GET", uri) as response:
                if response.status_code != 200:
                    raise VerificationError(
                        f"non-200 response code for asset {uri}: {response.status_code}"
                    )
                content_length = response.headers.get("Content-Length")
                if content_length is not None and content_length.isdigit():
                    self._check_size(asset, int(content_length))
                async for chunk in response.aiter_bytes():
                    content.extend(chunk)
                    self._check_size(asset, len(content))
        except httpx.HTTPError as exc:
            raise VerificationError(f"failed to get asset: {exc}") from exc
        return bytes(content)

    def _check_size(self, asset: str, size: int) -> None:
        if size > self.config.max_asset_bytes:
            raise AssetTooLargeError(asset, size, self.config.max_asset_bytes)


if TYPE_CHECKING:
    _fetcher_check: AssetFetcher = HttpAssetFetcher()
