"""Phase-based state machine reviewing one submission at a time."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, TypeAlias

from tokenmerge.config.review import ReviewConfig
from tokenmerge.domain.errors import ReviewError
from tokenmerge.domain.review_pipeline.classification import ClassificationPhase
from tokenmerge.domain.review_pipeline.context import (
    ReviewContext,
    ReviewOutcome,
    ReviewState,
)
from tokenmerge.domain.review_pipeline.decoding import DecodingPhase
from tokenmerge.domain.review_pipeline.identity import GlobalValidationPhase, LocalValidationPhase
from tokenmerge.domain.review_pipeline.reconstruction import ReconstructionPhase
from tokenmerge.domain.review_pipeline.schema_validation import SchemaValidator
from tokenmerge.domain.review_pipeline.verification import ContentVerifier, VerificationPhase

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokenmerge.domain.known_entries import KnownEntryRegistry
    from tokenmerge.domain.model import Token
    from tokenmerge.domain.ports.hosting import ErrorReporter
    from tokenmerge.domain.ports.probing import UrlProbeFactory
    from tokenmerge.domain.review_pipeline.context import Submission

log = getLogger(__name__)

MergeHook: TypeAlias = Callable[[ReviewContext], None]


class ReviewPhase(Protocol):
    """Contract implemented by each review phase."""

    name: str

    def run(self, context: ReviewContext) -> None: ...


@dataclass(slots=True)
class ReviewPipeline:
    """Run the ordered review phases and commit accepted tokens.

    A ``ReviewError`` raised by any phase, or by the merge hook, rejects the
    submission and leaves ``known_entries`` untouched. Other exceptions are
    programming or infrastructure errors and propagate to the caller.
    """

    known_entries: KnownEntryRegistry
    phases: Sequence[ReviewPhase] = field(default_factory=tuple)
    reporter: ErrorReporter | None = None

    def review(self, submission: Submission, *, merge: MergeHook | None = None) -> ReviewOutcome:
        context = ReviewContext(submission=submission)
        try:
            for phase in self.phases:
                log.debug("PR #%d: running %s", submission.number, phase.name)
                phase.run(context)
            if merge is not None:
                merge(context)
        except ReviewError as exc:
            return self._reject(context, exc)

        self.known_entries.commit(context.tokens)
        context.advance(ReviewState.ACCEPTED)
        log.info(
            "PR #%d accepted with %d new token(s)", submission.number, len(context.tokens)
        )
        return self._outcome(context)

    def _reject(self, context: ReviewContext, error: ReviewError) -> ReviewOutcome:
        context.advance(ReviewState.REJECTED)
        log.warning(
            "PR #%d rejected (%s): %s", context.submission.number, error.kind, error
        )
        if self.reporter is not None:
            self.reporter.report(context.submission, error)
        return self._outcome(context, error=error)

    @staticmethod
    def _outcome(context: ReviewContext, *, error: ReviewError | None = None) -> ReviewOutcome:
        return ReviewOutcome(
            submission=context.submission,
            state=context.state,
            tokens=() if error is not None else tuple(context.tokens),
            assets=context.assets,
            error=error,
            history=tuple(context.history),
        )


def build_review_pipeline(
    *,
    known_entries: KnownEntryRegistry,
    probe_factory: UrlProbeFactory,
    config: ReviewConfig | None = None,
    schema_validator: SchemaValidator | None = None,
    reporter: ErrorReporter | None = None,
) -> ReviewPipeline:
    """Wire the default phases: classify, reconstruct, decode, validate, verify."""

    active_config = config or ReviewConfig()
    validator = schema_validator or SchemaValidator.from_resource(
        verbose=active_config.verbose_schema_errors
    )
    return ReviewPipeline(
        known_entries=known_entries,
        phases=(
            ClassificationPhase(active_config),
            ReconstructionPhase(),
            DecodingPhase(),
            LocalValidationPhase(validator),
            GlobalValidationPhase(known_entries),
            VerificationPhase(ContentVerifier(probe_factory, active_config)),
        ),
        reporter=reporter,
    )


def accepted_tokens(outcomes: Sequence[ReviewOutcome]) -> list[Token]:
    return [token for outcome in outcomes if outcome.accepted for token in outcome.tokens]
