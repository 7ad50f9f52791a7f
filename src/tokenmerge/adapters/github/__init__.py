"""Public interface for the GitHub adapter."""

from __future__ import annotations

from .client import GitHubAPIError, GitHubSubmissionSource, to_submission
from .schema import PullRequestPayload

__all__ = [
    "GitHubAPIError",
    "GitHubSubmissionSource",
    "PullRequestPayload",
    "to_submission",
]
