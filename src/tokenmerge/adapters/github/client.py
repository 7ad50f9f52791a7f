"""HTTP client for the GitHub pull request API."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from tokenmerge.adapters.http_resilience import ResilientClient
from tokenmerge.config.github import GitHubConfig, get_github_config
from tokenmerge.domain.ports.hosting import SubmissionSource
from tokenmerge.domain.review_pipeline.context import Submission

from .schema import ErrorResponse, PullRequestPayload, UserPayload

if TYPE_CHECKING:
    from tokenmerge.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
PAGE_SIZE = 100

_PULL_REQUESTS_ADAPTER = TypeAdapter(list[PullRequestPayload])


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub API answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def to_submission(payload: PullRequestPayload, diff: str) -> Submission:
    return Submission(
        number=payload.number,
        diff=diff,
        title=payload.title,
        head_sha=payload.head.sha,
        author=payload.user.login if payload.user else None,
        html_url=payload.html_url,
        updated_at=payload.updated_at,
    )


@dataclass(slots=True)
class GitHubSubmissionSource:
    config: GitHubConfig = field(default_factory=get_github_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def current_user(self) -> str:
        return asyncio.run(self._current_user_async())

    def list_submissions(self, *, limit: int | None = None) -> list[Submission]:
        return asyncio.run(self._list_submissions_async(limit=limit))

    async def _current_user_async(self) -> str:
        async with self.client_factory(self.config.resilience) as client:
            response = await self._perform_request(client, "user")
            return UserPayload.model_validate_json(response.content).login

    async def _list_submissions_async(self, *, limit: int | None) -> list[Submission]:
        submissions: list[Submission] = []
        async with self.client_factory(self.config.resilience) as client:
            payloads = await self._open_pull_requests(client, limit=limit)
            for payload in payloads:
                diff = await self._raw_diff(client, payload.number)
                submissions.append(to_submission(payload, diff))
        return submissions

    async def _open_pull_requests(
        self, client: ResilientClient, *, limit: int | None
    ) -> list[PullRequestPayload]:
        pulls: list[PullRequestPayload] = []
        page = 1
        while True:
            log.debug("page %d", page)
            response = await self._perform_request(
                client,
                f"repos/{self.config.owner}/{self.config.repo}/pulls",
                params={"state": "open", "per_page": PAGE_SIZE, "page": page},
            )
            try:
                pulls.extend(_PULL_REQUESTS_ADAPTER.validate_json(response.content))
            except ValidationError as exc:
                raise GitHubAPIError(f"Unexpected pull request payload: {exc}") from exc

            if limit is not None and len(pulls) >= limit:
                return pulls[:limit]
            if "next" not in response.links:
                return pulls
            page += 1

    async def _raw_diff(self, client: ResilientClient, number: int) -> str:
        response = await self._perform_request(
            client,
            f"repos/{self.config.owner}/{self.config.repo}/pulls/{number}",
            headers={"Accept": DIFF_MEDIA_TYPE},
        )
        return response.text

    async def _perform_request(
        self,
        client: ResilientClient,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        request_headers = {"Authorization": f"Bearer {self.config.token}", **(headers or {})}
        response = await client.get(path, params=params, headers=request_headers)
        if response.is_error:
            message = response.reason_phrase
            with suppress(ValidationError):
                message = ErrorResponse.model_validate_json(response.content).message
            log.error(f"GitHub API error {response.status_code}: {message}")
            raise GitHubAPIError(message, status_code=response.status_code)
        return response


if TYPE_CHECKING:
    _source_check: SubmissionSource = GitHubSubmissionSource()
