"""Error taxonomy for submission review.

Every ``ReviewError`` is terminal for the submission it was raised for: the
pipeline turns it into a rejected outcome and leaves shared state untouched.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ErrorKind(StrEnum):
    STRUCTURAL = "structural"
    IDENTITY = "identity"
    SCHEMA = "schema"
    VERIFICATION = "verification"
    MERGE = "merge"


class ReviewError(RuntimeError):
    """Base class for errors that reject a submission."""

    kind: ErrorKind = ErrorKind.STRUCTURAL


class StructuralError(ReviewError):
    """The diff or the record text could not be turned into tokens."""

    kind = ErrorKind.STRUCTURAL


class DiffClassificationError(StructuralError):
    """A changed file is not allowed in a submission."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class HunkLineError(StructuralError):
    """A registry hunk contains something other than added or context lines."""

    def __init__(self, message: str, *, line: str, line_number: int) -> None:
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class RecordDecodeError(StructuralError):
    """Reconstructed record text could not be decoded into tokens."""


class IdentityError(ReviewError):
    kind = ErrorKind.IDENTITY


class DuplicateTokenError(IdentityError):
    """Two tokens of the same submission share an identifying field."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"duplicate {field} within PR: {value}")
        self.field = field
        self.value = value


class TokenCollisionError(IdentityError):
    """A submitted token reuses an identifier already present in the registry."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"token {field} {value} is already used")
        self.field = field
        self.value = value


class EmptyTokenNameError(IdentityError):
    def __init__(self, address: str) -> None:
        super().__init__(f"empty token name for {address}")
        self.address = address


class SchemaViolationError(ReviewError):
    """A token does not satisfy the compiled token schema."""

    kind = ErrorKind.SCHEMA

    def __init__(self, message: str, *, errors: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.errors = tuple(errors)


class VerificationError(ReviewError):
    """An external resource referenced by a token could not be confirmed."""

    kind = ErrorKind.VERIFICATION


class OrphanAssetError(VerificationError):
    def __init__(self, address: str) -> None:
        super().__init__(f"asset file for unknown token found: {address}")
        self.address = address


class AssetTooLargeError(VerificationError):
    def __init__(self, asset: str, size: int, limit: int) -> None:
        super().__init__(
            f"asset too large: {asset} is {size // 1024} KiB "
            f"(must be less than {limit // 1024} KiB)"
        )
        self.asset = asset
        self.size = size
        self.limit = limit


class MergeError(ReviewError):
    """Accepted tokens or their assets could not be written to the registry."""

    kind = ErrorKind.MERGE
