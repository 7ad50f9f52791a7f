"""Error reporters for rejected submissions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tokenmerge.domain.errors import ReviewError
    from tokenmerge.domain.ports.hosting import ErrorReporter
    from tokenmerge.domain.review_pipeline.context import Submission

log = getLogger(__name__)


class LoggingErrorReporter:
    """Record rejections in the log; posting review comments is left to a later reporter."""

    def report(self, submission: Submission, error: ReviewError) -> None:
        log.warning(
            "reporting %s error for PR #%d%s: %s",
            error.kind,
            submission.number,
            f" ({submission.html_url})" if submission.html_url else "",
            error,
        )


if TYPE_CHECKING:
    _reporter_check: ErrorReporter = LoggingErrorReporter()
