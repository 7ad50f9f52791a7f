"""Ports for the code-hosting side of a review cycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokenmerge.domain.errors import ReviewError
    from tokenmerge.domain.review_pipeline.context import Submission


@runtime_checkable
class SubmissionSource(Protocol):
    """Supplies open submissions together with their raw diffs."""

    def list_submissions(self, *, limit: int | None = None) -> Sequence[Submission]: ...


@runtime_checkable
class AssetFetcher(Protocol):
    """Downloads the bytes of newly added assets at the submission's revision."""

    def fetch_assets(self, submission: Submission, assets: Sequence[str]) -> dict[str, bytes]: ...


@runtime_checkable
class ErrorReporter(Protocol):
    """Receives the terminal error of every rejected submission."""

    def report(self, submission: Submission, error: ReviewError) -> None: ...


__all__ = ["AssetFetcher", "ErrorReporter", "SubmissionSource"]
