"""Merge accepted tokens and their assets into the registry snapshot."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from tokenmerge.domain.errors import MergeError
from tokenmerge.domain.ports.workspace import WorkspaceError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokenmerge.domain.model import TokenList
    from tokenmerge.domain.ports.hosting import AssetFetcher
    from tokenmerge.domain.ports.workspace import RegistryWorkspace
    from tokenmerge.domain.review_pipeline.context import ReviewContext

log = getLogger(__name__)


class TokenListMerger:
    """Merge hook appending accepted tokens to the current snapshot.

    Assets are downloaded before anything is written so an oversized or
    unreachable asset rejects the submission without touching the workspace.
    A failed write raises ``MergeError`` after removing the assets already
    written for the submission. With ``dry_run`` the in-memory snapshot still
    advances, which keeps later submissions of the same run consistent, but
    nothing is written.
    """

    def __init__(
        self,
        tokenlist: TokenList,
        *,
        workspace: RegistryWorkspace,
        asset_fetcher: AssetFetcher,
        dry_run: bool = False,
    ) -> None:
        self.tokenlist = tokenlist
        self.workspace = workspace
        self.asset_fetcher = asset_fetcher
        self.dry_run = dry_run

    def __call__(self, context: ReviewContext) -> None:
        submission = context.submission
        log.info("committing change for %d", submission.number)
        updated = self.tokenlist.with_tokens(context.tokens)

        if not self.dry_run:
            assets = self.asset_fetcher.fetch_assets(submission, context.assets)
            written: list[str] = []
            try:
                for path, content in assets.items():
                    self.workspace.write_asset(path, content)
                    written.append(path)
                self.workspace.write_tokenlist(updated)
            except (OSError, WorkspaceError) as exc:
                self._discard_assets(written)
                raise MergeError(f"failed to commit token changes: {exc}") from exc

        self.tokenlist = updated
        log.debug("merged %s (%d tokens total)", submission.display_title, len(updated.tokens))

    def _discard_assets(self, paths: Sequence[str]) -> None:
        for path in reversed(paths):
            try:
                self.workspace.remove_asset(path)
            except (OSError, WorkspaceError):
                log.exception("failed to remove asset %s after aborted merge", path)
