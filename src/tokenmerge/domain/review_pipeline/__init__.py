"""Submission review pipeline.

Each phase takes the ``ReviewContext`` of one submission one state further:
classification, reconstruction, decoding, local validation, global
validation and verification. The first ``ReviewError`` raised rejects the
submission.
"""

from __future__ import annotations

from .classification import ClassificationPhase, ClassifiedDiff, classify_diff
from .context import ReviewContext, ReviewOutcome, ReviewState, Submission
from .decoding import DecodingPhase, decode_tokens
from .identity import GlobalValidationPhase, LocalValidationPhase
from .orchestrator import (
    MergeHook,
    ReviewPhase,
    ReviewPipeline,
    accepted_tokens,
    build_review_pipeline,
)
from .reconstruction import ReconstructedText, ReconstructionPhase, reconstruct_hunk
from .schema_validation import SchemaValidator
from .verification import ContentVerifier, VerificationPhase

__all__ = [
    "ClassificationPhase",
    "ClassifiedDiff",
    "ContentVerifier",
    "DecodingPhase",
    "GlobalValidationPhase",
    "LocalValidationPhase",
    "MergeHook",
    "ReconstructedText",
    "ReconstructionPhase",
    "ReviewContext",
    "ReviewOutcome",
    "ReviewPhase",
    "ReviewPipeline",
    "ReviewState",
    "SchemaValidator",
    "Submission",
    "VerificationPhase",
    "accepted_tokens",
    "build_review_pipeline",
    "classify_diff",
    "decode_tokens",
    "reconstruct_hunk",
]
