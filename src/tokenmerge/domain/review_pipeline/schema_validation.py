"""Validate tokens against the packaged token schema."""

from __future__ import annotations

import json
from importlib import resources
from logging import getLogger
from typing import TYPE_CHECKING, Any

from jsonschema import Draft202012Validator

from tokenmerge.domain.errors import EmptyTokenNameError, SchemaViolationError

if TYPE_CHECKING:
    from jsonschema import ValidationError as JsonSchemaError

    from tokenmerge.domain.model import Token

log = getLogger(__name__)

SCHEMA_PACKAGE = "tokenmerge.schemas"
SCHEMA_RESOURCE = "token.schema.json"


def load_token_schema() -> dict[str, Any]:
    text = resources.files(SCHEMA_PACKAGE).joinpath(SCHEMA_RESOURCE).read_text(encoding="utf-8")
    return json.loads(text)


def _describe(error: JsonSchemaError) -> str:
    path = ".".join(str(part) for part in error.absolute_path) or "<root>"
    return f"{path}: {error.message}"


class SchemaValidator:
    """Checks tokens against a compiled JSON Schema.

    When a token violates several constraints only the last one (ordered by
    instance path) is reported by default. That is usually the most specific
    complaint, such as a pattern mismatch on a nested field, but it is a
    usability heuristic: pass ``verbose=True`` to get every violation in the
    error message. The complete list is always available on
    ``SchemaViolationError.errors``.
    """

    def __init__(self, schema: dict[str, Any], *, verbose: bool = False) -> None:
        Draft202012Validator.check_schema(schema)
        self._validator = Draft202012Validator(schema)
        self.verbose = verbose

    @classmethod
    def from_resource(cls, *, verbose: bool = False) -> SchemaValidator:
        return cls(load_token_schema(), verbose=verbose)

    def violations(self, token: Token) -> list[str]:
        errors = sorted(
            self._validator.iter_errors(token.to_payload()),
            key=lambda error: [str(part) for part in error.absolute_path],
        )
        return [_describe(error) for error in errors]

    def validate(self, token: Token) -> None:
        violations = self.violations(token)
        if violations:
            detail = "; ".join(violations) if self.verbose else violations[-1]
            raise SchemaViolationError(f"error validating schema: {detail}", errors=violations)

        if not token.name.strip():
            raise EmptyTokenNameError(token.address)
