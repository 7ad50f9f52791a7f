from __future__ import annotations

import pytest

from tokenmerge.config import MissingConfigurationError, ReviewConfig, get_github_config
from tokenmerge.config.github import GITHUB_API_URL


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GITHUB_TOKEN", "TOKENLIST_OWNER", "TOKENLIST_REPO"):
        monkeypatch.delenv(name, raising=False)


def test_token_is_required() -> None:
    with pytest.raises(MissingConfigurationError, match="GITHUB_TOKEN"):
        get_github_config()


def test_defaults_target_solana_token_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")

    config = get_github_config()

    assert (config.owner, config.repo) == ("solana-labs", "token-list")
    assert config.token == "ghp_test"
    assert config.resilience.base_url == GITHUB_API_URL
    assert config.resilience.ratelimit is not None


def test_repository_can_be_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("TOKENLIST_OWNER", "fork-owner")
    monkeypatch.setenv("TOKENLIST_REPO", "fork-repo")

    from_env = get_github_config()
    explicit = get_github_config(owner="cli-owner")

    assert (from_env.owner, from_env.repo) == ("fork-owner", "fork-repo")
    assert (explicit.owner, explicit.repo) == ("cli-owner", "fork-repo")


def test_review_defaults() -> None:
    config = ReviewConfig()

    assert config.tokenlist_path == "src/tokens/solana.tokenlist.json"
    assert config.verification_timeout_seconds == 5.0
    assert config.max_asset_bytes == 200 * 1024
    assert config.local_asset_prefix == (
        "https://raw.githubusercontent.com/solana-labs/token-list/main/assets/"
    )
    assert config.asset_extensions == {".png", ".jpg", ".svg"}
