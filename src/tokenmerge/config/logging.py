"""Logging setup for the tokenmerge CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# request-level chatter from the HTTP stack, only interesting with --verbose
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    ``verbose`` switches to DEBUG, which traces every added diff line and
    verification URL, and lets the HTTP client log its requests. Pass
    ``force=True`` to replace handlers installed earlier in the process.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
