"""GitHub configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

GITHUB_API_URL = "https://api.github.com/"
GITHUB_TIMEOUT_SECONDS = 30.0
DEFAULT_OWNER = "solana-labs"
DEFAULT_REPO = "token-list"


@dataclass(frozen=True)
class GitHubConfig:
    """Holds GitHub API configuration values."""

    token: str
    owner: str
    repo: str
    resilience: ResilienceConfig


def get_github_config(
    *,
    owner: str | None = None,
    repo: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> GitHubConfig:
    values = require_env_vars(("GITHUB_TOKEN",))
    return GitHubConfig(
        token=values["GITHUB_TOKEN"],
        owner=owner or optional_env_var("TOKENLIST_OWNER", DEFAULT_OWNER),
        repo=repo or optional_env_var("TOKENLIST_REPO", DEFAULT_REPO),
        resilience=resilience
        or ResilienceConfig(
            name="github",
            base_url=GITHUB_API_URL,
            timeout_seconds=GITHUB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        ),
    )
