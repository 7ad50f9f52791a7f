#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tokenmerge.adapters.github import GitHubSubmissionSource
from tokenmerge.adapters.workspace import LocalRegistryWorkspace
from tokenmerge.app import review_open_pull_requests
from tokenmerge.config import ConfigurationError, ReviewConfig, configure_logging, get_github_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Review and merge token list pull requests")
    parser.add_argument(
        "--workspace",
        type=Path,
        default=Path.cwd(),
        help="Path to the token list checkout (default: current directory)",
    )
    parser.add_argument("--owner", type=str, help="Repository owner (default: solana-labs)")
    parser.add_argument("--repo", type=str, help="Repository name (default: token-list)")
    parser.add_argument(
        "--limit",
        type=int,
        help="Maximum number of open pull requests to review",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Review submissions without writing to the workspace",
    )
    parser.add_argument(
        "--verbose-schema-errors",
        action="store_true",
        help="Report every schema violation instead of only the last one",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(list(argv))
    if args.limit is not None and args.limit <= 0:
        raise ValueError("Limit must be positive")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(verbose=parsed_args.verbose, force=True)

    config = replace(ReviewConfig(), verbose_schema_errors=parsed_args.verbose_schema_errors)
    try:
        github = get_github_config(owner=parsed_args.owner, repo=parsed_args.repo)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        source = GitHubSubmissionSource(config=github)
        log.info("running as: %s", source.current_user())
        summary = review_open_pull_requests(
            source=source,
            workspace=LocalRegistryWorkspace(
                root=parsed_args.workspace, tokenlist_path=config.tokenlist_path
            ),
            config=config,
            limit=parsed_args.limit,
            dry_run=parsed_args.dry_run,
        )
        for outcome in summary.outcomes:
            if outcome.error is not None:
                log.info("PR #%d: %s", outcome.submission.number, outcome.error)
    except Exception:
        log.exception("Fatal error during review")
        sys.exit(1)

    log.info("done")


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
