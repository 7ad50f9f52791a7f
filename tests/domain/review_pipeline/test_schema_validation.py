from __future__ import annotations

import pytest

from tests.support.tokens import make_token
from tokenmerge.domain.errors import EmptyTokenNameError, SchemaViolationError
from tokenmerge.domain.review_pipeline.schema_validation import SchemaValidator, load_token_schema


def test_valid_token_passes(schema_validator: SchemaValidator) -> None:
    token = make_token(
        tags=["meme-token", "community"],
        extensions={
            "website": "https://samoyedcoin.com",
            "twitter": "https://twitter.com/samoyedcoin",
            "coingeckoId": "samoyedcoin",
        },
    )

    schema_validator.validate(token)
    assert schema_validator.violations(token) == []


def test_validation_is_repeatable(schema_validator: SchemaValidator) -> None:
    token = make_token(symbol="SAMO!")

    first = schema_validator.violations(token)
    second = schema_validator.violations(token)

    assert first
    assert first == second


def test_reports_only_the_last_violation(schema_validator: SchemaValidator) -> None:
    token = make_token(chainId=1, extensions={"twitter": "https://x.com/samoyedcoin"})

    with pytest.raises(SchemaViolationError) as exc:
        schema_validator.validate(token)

    assert len(exc.value.errors) == 2
    assert exc.value.errors[0].startswith("chainId:")
    assert exc.value.errors[-1].startswith("extensions.twitter:")
    assert str(exc.value) == f"error validating schema: {exc.value.errors[-1]}"


def test_verbose_mode_reports_every_violation() -> None:
    validator = SchemaValidator.from_resource(verbose=True)
    token = make_token(chainId=1, symbol="SAMO!")

    with pytest.raises(SchemaViolationError) as exc:
        validator.validate(token)

    assert "chainId:" in str(exc.value)
    assert "symbol:" in str(exc.value)


@pytest.mark.parametrize(
    "overrides",
    [
        {"address": "0x0000000000000000000000000000000000000000"},
        {"decimals": 256},
        {"logoURI": "http://example.com/logo.png"},
        {"tags": ["Not A Tag"]},
        {"extensions": {"coingeckoId": "Samoyed Coin"}},
        {"name": "x" * 41},
    ],
)
def test_constraint_violations(
    schema_validator: SchemaValidator, overrides: dict[str, object]
) -> None:
    with pytest.raises(SchemaViolationError, match="error validating schema"):
        schema_validator.validate(make_token(**overrides))


def test_blank_name_is_rejected_after_schema(schema_validator: SchemaValidator) -> None:
    with pytest.raises(EmptyTokenNameError, match="empty token name"):
        schema_validator.validate(make_token(name="   "))


def test_empty_name_violates_schema(schema_validator: SchemaValidator) -> None:
    with pytest.raises(SchemaViolationError, match="name"):
        schema_validator.validate(make_token(name=""))


def test_packaged_schema_is_a_strict_object_schema() -> None:
    schema = load_token_schema()

    assert schema["additionalProperties"] is False
    assert set(schema["required"]) == {
        "chainId",
        "address",
        "symbol",
        "name",
        "decimals",
        "logoURI",
    }
