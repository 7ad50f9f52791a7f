from __future__ import annotations

import pytest

from tests.support.tokens import FakeUrlProbe, baseline_tokens, make_tokenlist
from tokenmerge.config.review import ReviewConfig
from tokenmerge.domain.known_entries import KnownEntryRegistry
from tokenmerge.domain.model import TokenList
from tokenmerge.domain.review_pipeline import ReviewPipeline, build_review_pipeline
from tokenmerge.domain.review_pipeline.schema_validation import SchemaValidator


@pytest.fixture(scope="session")
def schema_validator() -> SchemaValidator:
    return SchemaValidator.from_resource()


@pytest.fixture
def review_config() -> ReviewConfig:
    return ReviewConfig()


@pytest.fixture
def baseline() -> TokenList:
    return make_tokenlist(baseline_tokens())


@pytest.fixture
def known_entries(baseline: TokenList) -> KnownEntryRegistry:
    return KnownEntryRegistry.from_tokens(baseline.tokens)


@pytest.fixture
def probe() -> FakeUrlProbe:
    return FakeUrlProbe()


@pytest.fixture
def pipeline(
    known_entries: KnownEntryRegistry,
    probe: FakeUrlProbe,
    review_config: ReviewConfig,
    schema_validator: SchemaValidator,
) -> ReviewPipeline:
    return build_review_pipeline(
        known_entries=known_entries,
        probe_factory=lambda: probe,
        config=review_config,
        schema_validator=schema_validator,
    )
