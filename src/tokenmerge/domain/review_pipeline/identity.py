"""Duplicate, collision and schema checks for decoded tokens."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from tokenmerge.domain.known_entries import KnownEntryRegistry
from tokenmerge.domain.review_pipeline.context import ReviewState

if TYPE_CHECKING:
    from tokenmerge.domain.review_pipeline.context import ReviewContext
    from tokenmerge.domain.review_pipeline.schema_validation import SchemaValidator

log = getLogger(__name__)


class LocalValidationPhase:
    """Reject duplicates within the submission, then schema-check each token."""

    name: str = "local_validation"

    def __init__(self, schema_validator: SchemaValidator) -> None:
        self.schema_validator = schema_validator

    def run(self, context: ReviewContext) -> None:
        KnownEntryRegistry.check_local(context.tokens)
        for token in context.tokens:
            self.schema_validator.validate(token)
        context.advance(ReviewState.LOCALLY_VALIDATED)


class GlobalValidationPhase:
    """Reject tokens whose identifiers are already taken in the registry."""

    name: str = "global_validation"

    def __init__(self, known_entries: KnownEntryRegistry) -> None:
        self.known_entries = known_entries

    def run(self, context: ReviewContext) -> None:
        for token in context.tokens:
            self.known_entries.check_global(token)
        log.debug("no collisions for %d token(s)", len(context.tokens))
        context.advance(ReviewState.GLOBALLY_VALIDATED)
