"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, get_github_config
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging
from .review import ReviewConfig

__all__ = [
    "ConfigurationError",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "ReviewConfig",
    "configure_logging",
    "get_github_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
