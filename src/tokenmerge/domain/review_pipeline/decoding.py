"""Tolerant-then-strict decoding of reconstructed token records."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import json5
from pydantic import TypeAdapter, ValidationError

from tokenmerge.domain.errors import RecordDecodeError
from tokenmerge.domain.model import Token
from tokenmerge.domain.review_pipeline.context import ReviewState

if TYPE_CHECKING:
    from tokenmerge.domain.review_pipeline.context import ReviewContext
    from tokenmerge.domain.review_pipeline.reconstruction import ReconstructedText

_TOKEN_ADAPTER = TypeAdapter(Token)
_TOKENS_ADAPTER = TypeAdapter(list[Token])


def normalize_json(text: str) -> str:
    """Parse ``text`` permissively (trailing commas allowed) and re-emit plain JSON."""

    try:
        value = json5.loads(text)
    except ValueError as exc:
        raise RecordDecodeError(f"failed to normalize JSON: {exc}") from exc
    return json.dumps(value)


def decode_tokens(reconstructed: ReconstructedText) -> list[Token]:
    normalized = normalize_json(reconstructed.text)
    try:
        if reconstructed.multiple:
            return _TOKENS_ADAPTER.validate_json(normalized, strict=True)
        return [_TOKEN_ADAPTER.validate_json(normalized, strict=True)]
    except ValidationError as exc:
        raise RecordDecodeError(f"failed to parse JSON: {exc}") from exc


class DecodingPhase:
    name: str = "decoding"

    def run(self, context: ReviewContext) -> None:
        for reconstructed in context.texts:
            context.tokens.extend(decode_tokens(reconstructed))
        context.advance(ReviewState.DECODED)
