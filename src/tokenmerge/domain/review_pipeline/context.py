"""Shared context structures for the review pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from unidiff import PatchedFile

    from tokenmerge.domain.errors import ReviewError
    from tokenmerge.domain.model import Token
    from tokenmerge.domain.review_pipeline.reconstruction import ReconstructedText


class ReviewState(StrEnum):
    PENDING = "pending"
    CLASSIFIED = "classified"
    RECONSTRUCTED = "reconstructed"
    DECODED = "decoded"
    LOCALLY_VALIDATED = "locally_validated"
    GLOBALLY_VALIDATED = "globally_validated"
    VERIFIED = "verified"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class Submission:
    """A single change set under review: one pull request and its raw diff."""

    number: int
    diff: str
    title: str = ""
    head_sha: str | None = None
    author: str | None = None
    html_url: str | None = None
    updated_at: datetime | None = None

    @property
    def display_title(self) -> str:
        return self.title or f"Merge #{self.number}"


@dataclass(slots=True)
class ReviewContext:
    """Mutable context shared across the phases of one submission review."""

    submission: Submission
    state: ReviewState = ReviewState.PENDING
    history: list[ReviewState] = field(default_factory=list[ReviewState])
    assets: tuple[str, ...] = ()
    tokenlist_diff: PatchedFile | None = None
    texts: list[ReconstructedText] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)

    def advance(self, state: ReviewState) -> None:
        self.state = state
        self.history.append(state)


@dataclass(slots=True, frozen=True)
class ReviewOutcome:
    """Result of reviewing one submission."""

    submission: Submission
    state: ReviewState
    tokens: tuple[Token, ...] = ()
    assets: tuple[str, ...] = ()
    error: ReviewError | None = None
    history: tuple[ReviewState, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.state is ReviewState.ACCEPTED
