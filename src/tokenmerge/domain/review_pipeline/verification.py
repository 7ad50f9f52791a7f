"""Reachability and identity checks for URLs referenced by submitted tokens."""

from __future__ import annotations

import asyncio
import re
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError

from tokenmerge.config.review import ReviewConfig
from tokenmerge.domain.errors import OrphanAssetError, VerificationError
from tokenmerge.domain.ports.probing import ProbeFailedError
from tokenmerge.domain.review_pipeline.classification import asset_address
from tokenmerge.domain.review_pipeline.context import ReviewState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokenmerge.domain.model import Token
    from tokenmerge.domain.ports.probing import ProbeResponse, UrlProbe, UrlProbeFactory
    from tokenmerge.domain.review_pipeline.context import ReviewContext

log = getLogger(__name__)

TWITTER_URL_RE = re.compile(r"^https://twitter.com/(\w+)$")


class ShadowbanProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    screen_name: str | None = None
    has_tweets: bool = False
    exists: bool = False


class ShadowbanResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    profile: ShadowbanProfile
    timestamp: float | None = None


def check_orphan_assets(tokens: Sequence[Token], assets: Sequence[str]) -> None:
    """Every submitted asset must belong to a submitted token address."""

    addresses = {token.address for token in tokens}
    for asset in assets:
        address = asset_address(asset)
        if address not in addresses:
            raise OrphanAssetError(address)


class ContentVerifier:
    """Verify logo, CoinGecko, website and Twitter references of tokens.

    Every network call is bounded by ``verification_timeout_seconds``; a
    timeout, a transport failure and a non-200 status are all treated as a
    failed verification.
    """

    def __init__(
        self,
        probe_factory: UrlProbeFactory,
        config: ReviewConfig | None = None,
    ) -> None:
        self.probe_factory = probe_factory
        self.config = config or ReviewConfig()

    async def verify(self, tokens: Sequence[Token], assets: Sequence[str]) -> None:
        log.debug("found %d image assets", len(assets))
        for asset in assets:
            log.debug("  %s", asset_address(asset))
        check_orphan_assets(tokens, assets)

        async with self.probe_factory() as probe:
            for token in tokens:
                await self.verify_token(probe, token, assets)

    async def verify_token(self, probe: UrlProbe, token: Token, assets: Sequence[str]) -> None:
        try:
            await self._verify_logo_uri(probe, token.logo_uri, assets)
        except VerificationError as exc:
            raise VerificationError(f"failed verifying image URI: {exc}") from exc

        coingecko_id = token.extension("coingeckoId")
        if coingecko_id is not None:
            try:
                await self._require_ok(probe, "HEAD", self.config.coingecko_url + coingecko_id)
            except VerificationError as exc:
                raise VerificationError(f"failed to verify coingecko ID: {exc}") from exc

        website = token.extension("website")
        if website is not None:
            try:
                await self._require_ok(probe, "HEAD", website)
            except VerificationError as exc:
                raise VerificationError(f"failed to verify website: {website}") from exc

        twitter = token.extension("twitter")
        if twitter is not None:
            try:
                await self._verify_twitter_handle(probe, twitter)
            except VerificationError as exc:
                raise VerificationError(f"failed to verify Twitter handle: {twitter}") from exc

        log.debug("found valid JSON for token %s", token.name)

    async def _verify_logo_uri(self, probe: UrlProbe, uri: str, assets: Sequence[str]) -> None:
        # logos shipped with the submission are checked against its asset list
        if uri.startswith(self.config.local_asset_prefix):
            for asset in assets:
                if uri == self.config.asset_base_url + asset:
                    return

        log.debug("verifying external image URI %s", uri)
        await self._require_ok(probe, "HEAD", uri)

    async def _verify_twitter_handle(self, probe: UrlProbe, uri: str) -> None:
        match = TWITTER_URL_RE.match(uri)
        if match is None:
            raise VerificationError(f"invalid Twitter URI: {uri}")
        handle = match.group(1)

        log.debug("verifying Twitter handle %s", handle)
        response = await self._require_ok(probe, "GET", self.config.shadowban_url + handle)
        try:
            payload = ShadowbanResponse.model_validate_json(response.body)
        except ValidationError as exc:
            raise VerificationError(f"failed to decode response: {exc}") from exc

        if not payload.profile.exists:
            raise VerificationError(f"Twitter handle {handle} does not exist")
        if not payload.profile.has_tweets:
            raise VerificationError(f"Twitter handle {handle} has no tweets")

    async def _require_ok(self, probe: UrlProbe, method: str, url: str) -> ProbeResponse:
        timeout = self.config.verification_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                if method == "HEAD":
                    response = await probe.head(url)
                else:
                    response = await probe.get(url)
        except TimeoutError as exc:
            raise VerificationError(f"timed out after {timeout}s verifying {url}") from exc
        except ProbeFailedError as exc:
            raise VerificationError(
                f"failed to verify {url} using {method} request: {exc}"
            ) from exc

        if response.status_code != 200:
            raise VerificationError(
                f"non-200 response code for URL {url}: {response.status_code}"
            )
        return response


class VerificationPhase:
    name: str = "verification"

    def __init__(self, verifier: ContentVerifier) -> None:
        self.verifier = verifier

    def run(self, context: ReviewContext) -> None:
        asyncio.run(self.verifier.verify(context.tokens, context.assets))
        context.advance(ReviewState.VERIFIED)
