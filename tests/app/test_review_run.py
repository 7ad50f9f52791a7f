from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from tests.support.tokens import (
    RAY,
    SAMO,
    FakeUrlProbe,
    asset_path,
    baseline_tokens,
    make_submission,
    make_tokenlist,
    submission_for,
    token_payload,
    tokenlist_diff,
)
from tokenmerge.adapters.workspace import LocalRegistryWorkspace
from tokenmerge.app import review_open_pull_requests
from tokenmerge.config.review import TOKENLIST_PATH
from tokenmerge.domain.errors import HunkLineError, MergeError, TokenCollisionError
from tokenmerge.domain.model import TokenList
from tokenmerge.domain.review_pipeline.context import Submission


@dataclass
class FakeSubmissionSource:
    submissions: list[Submission]
    limits: list[int | None] = field(default_factory=list)

    def list_submissions(self, *, limit: int | None = None) -> list[Submission]:
        self.limits.append(limit)
        return self.submissions[:limit]


@dataclass
class FakeAssetFetcher:
    fetched: list[str] = field(default_factory=list)

    def fetch_assets(self, submission: Submission, assets: tuple[str, ...]) -> dict[str, bytes]:
        self.fetched.extend(assets)
        return {asset: f"logo of #{submission.number}".encode() for asset in assets}


@pytest.fixture
def workspace(tmp_path: Path) -> LocalRegistryWorkspace:
    checkout = LocalRegistryWorkspace(root=tmp_path)
    checkout.write_tokenlist(make_tokenlist(baseline_tokens()))
    return checkout


def _submissions() -> list[Submission]:
    removed = tokenlist_diff(['-      "symbol": "USDT",', '+      "symbol": "USDT2",'])
    return [
        submission_for([token_payload()], assets=[asset_path(SAMO)], number=1),
        make_submission(removed, number=2),
        submission_for(
            [token_payload(address=RAY, symbol="SAMO", name="Raydium")],
            assets=[asset_path(RAY)],
            number=3,
        ),
    ]


def test_review_run_merges_accepted_submissions(
    workspace: LocalRegistryWorkspace, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    source = FakeSubmissionSource(_submissions())
    fetcher = FakeAssetFetcher()
    caplog.set_level(logging.INFO, logger="tokenmerge")

    summary = review_open_pull_requests(
        source=source,
        workspace=workspace,
        asset_fetcher=fetcher,
        probe_factory=FakeUrlProbe,
    )

    assert (summary.reviewed, summary.accepted, summary.rejected) == (3, 1, 2)
    assert [token.address for token in summary.added_tokens] == [SAMO]
    assert isinstance(summary.outcomes[1].error, HunkLineError)
    assert isinstance(summary.outcomes[2].error, TokenCollisionError)
    assert fetcher.fetched == [asset_path(SAMO)]
    assert (tmp_path / asset_path(SAMO)).read_bytes() == b"logo of #1"
    assert not (tmp_path / asset_path(RAY)).exists()

    document = json.loads((tmp_path / TOKENLIST_PATH).read_text(encoding="utf-8"))
    assert [token["symbol"] for token in document["tokens"]] == ["USDC", "USDT", "SAMO"]
    assert summary.tokenlist is not None
    assert summary.tokenlist.tokens[-1].address == SAMO
    assert "Finished review: reviewed=3, accepted=1, rejected=2" in caplog.text


def test_dry_run_leaves_workspace_untouched(
    workspace: LocalRegistryWorkspace, tmp_path: Path
) -> None:
    before = (tmp_path / TOKENLIST_PATH).read_text(encoding="utf-8")
    fetcher = FakeAssetFetcher()

    summary = review_open_pull_requests(
        source=FakeSubmissionSource(_submissions()),
        workspace=workspace,
        asset_fetcher=fetcher,
        probe_factory=FakeUrlProbe,
        dry_run=True,
    )

    assert summary.accepted == 1
    assert summary.tokenlist is not None
    assert len(summary.tokenlist.tokens) == 3
    assert (tmp_path / TOKENLIST_PATH).read_text(encoding="utf-8") == before
    assert fetcher.fetched == []


def test_limit_is_forwarded_to_source(workspace: LocalRegistryWorkspace) -> None:
    source = FakeSubmissionSource(_submissions())

    summary = review_open_pull_requests(
        source=source,
        workspace=workspace,
        asset_fetcher=FakeAssetFetcher(),
        probe_factory=FakeUrlProbe,
        limit=1,
    )

    assert source.limits == [1]
    assert summary.reviewed == 1


@dataclass(slots=True)
class FailingOnceWorkspace(LocalRegistryWorkspace):
    failures: int = 1

    def write_tokenlist(self, tokenlist: TokenList) -> None:
        if self.failures:
            self.failures -= 1
            raise IsADirectoryError(21, "Is a directory", str(self.tokenlist_file))
        LocalRegistryWorkspace.write_tokenlist(self, tokenlist)


def test_write_failure_rejects_only_that_submission(tmp_path: Path) -> None:
    LocalRegistryWorkspace(root=tmp_path).write_tokenlist(make_tokenlist(baseline_tokens()))
    submissions = [
        submission_for([token_payload()], assets=[asset_path(SAMO)], number=1),
        submission_for(
            [token_payload(address=RAY, symbol="RAY", name="Raydium")],
            assets=[asset_path(RAY)],
            number=2,
        ),
    ]

    summary = review_open_pull_requests(
        source=FakeSubmissionSource(submissions),
        workspace=FailingOnceWorkspace(root=tmp_path),
        asset_fetcher=FakeAssetFetcher(),
        probe_factory=FakeUrlProbe,
    )

    assert isinstance(summary.outcomes[0].error, MergeError)
    assert summary.outcomes[1].accepted
    assert not (tmp_path / asset_path(SAMO)).exists()
    assert (tmp_path / asset_path(RAY)).read_bytes() == b"logo of #2"
    document = json.loads((tmp_path / TOKENLIST_PATH).read_text(encoding="utf-8"))
    assert [token["symbol"] for token in document["tokens"]] == ["USDC", "USDT", "RAY"]
