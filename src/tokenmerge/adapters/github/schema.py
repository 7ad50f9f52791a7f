"""Pydantic models describing the GitHub REST API payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserPayload(GitHubBaseModel):
    login: str


class HeadPayload(GitHubBaseModel):
    sha: str
    ref: str | None = None


class PullRequestPayload(GitHubBaseModel):
    number: int
    title: str = ""
    html_url: str | None = None
    state: str = "open"
    updated_at: datetime | None = None
    head: HeadPayload
    user: UserPayload | None = None


class ErrorResponse(GitHubBaseModel):
    message: str
    documentation_url: str | None = None
