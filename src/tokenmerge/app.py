"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from tokenmerge.adapters.assets import HttpAssetFetcher
from tokenmerge.adapters.github import GitHubSubmissionSource
from tokenmerge.adapters.probe import HttpxUrlProbe
from tokenmerge.adapters.reporting import LoggingErrorReporter
from tokenmerge.adapters.workspace import LocalRegistryWorkspace
from tokenmerge.config.review import ReviewConfig
from tokenmerge.domain.known_entries import KnownEntryRegistry
from tokenmerge.domain.merging import TokenListMerger
from tokenmerge.domain.review_pipeline import build_review_pipeline
from tokenmerge.domain.review_pipeline.orchestrator import accepted_tokens

if TYPE_CHECKING:
    from tokenmerge.domain.model import Token, TokenList
    from tokenmerge.domain.ports.hosting import AssetFetcher, ErrorReporter, SubmissionSource
    from tokenmerge.domain.ports.probing import UrlProbeFactory
    from tokenmerge.domain.ports.workspace import RegistryWorkspace
    from tokenmerge.domain.review_pipeline.context import ReviewOutcome


log = getLogger(__name__)


@dataclass(slots=True)
class ReviewRunSummary:
    """Outcome of one review run over all open submissions."""

    outcomes: list[ReviewOutcome] = field(default_factory=list)
    tokenlist: TokenList | None = None

    @property
    def reviewed(self) -> int:
        return len(self.outcomes)

    @property
    def accepted(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.accepted)

    @property
    def rejected(self) -> int:
        return self.reviewed - self.accepted

    @property
    def added_tokens(self) -> list[Token]:
        return accepted_tokens(self.outcomes)


def review_open_pull_requests(
    *,
    source: SubmissionSource | None = None,
    workspace: RegistryWorkspace | None = None,
    asset_fetcher: AssetFetcher | None = None,
    probe_factory: UrlProbeFactory | None = None,
    reporter: ErrorReporter | None = None,
    config: ReviewConfig | None = None,
    limit: int | None = None,
    dry_run: bool = False,
) -> ReviewRunSummary:
    """Review open token list pull requests and merge the accepted ones."""

    active_config = config or ReviewConfig()
    effective_workspace = workspace or LocalRegistryWorkspace(
        tokenlist_path=active_config.tokenlist_path
    )
    effective_source = source or GitHubSubmissionSource()
    if asset_fetcher is None:
        if isinstance(effective_source, GitHubSubmissionSource):
            asset_fetcher = HttpAssetFetcher(
                owner=effective_source.config.owner,
                repo=effective_source.config.repo,
                config=active_config,
            )
        else:
            asset_fetcher = HttpAssetFetcher(config=active_config)

    log.info("loading tokenlist from worktree")
    tokenlist = effective_workspace.load_tokenlist()
    known_entries = KnownEntryRegistry.from_tokens(tokenlist.tokens)

    pipeline = build_review_pipeline(
        known_entries=known_entries,
        probe_factory=probe_factory or HttpxUrlProbe,
        config=active_config,
        reporter=reporter or LoggingErrorReporter(),
    )
    merger = TokenListMerger(
        tokenlist,
        workspace=effective_workspace,
        asset_fetcher=asset_fetcher,
        dry_run=dry_run,
    )

    submissions = effective_source.list_submissions(limit=limit)
    log.info("processing %d PRs", len(submissions))

    summary = ReviewRunSummary()
    for submission in submissions:
        log.info("processing PR %s", submission.html_url or f"#{submission.number}")
        summary.outcomes.append(pipeline.review(submission, merge=merger))

    summary.tokenlist = merger.tokenlist
    log.info(
        f"Finished review: reviewed={summary.reviewed}, accepted={summary.accepted}, "
        f"rejected={summary.rejected}, added_tokens={len(summary.added_tokens)}"
    )
    return summary
