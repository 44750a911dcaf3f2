"""Exceptions for writable-table."""

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class WritableTableError(Exception):
    """
    Base exception for all writable-table errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Validation Exceptions
# ---------------------------------------------------------------------------


class ValidationError(WritableTableError):
    """
    Raised when a value is rejected before it is applied.

    Validation always happens before mutation, so the object that raised
    is left exactly as it was.

    Attributes:
        field: Name of the field or column being validated
        value: The rejected value
        reason: Human-readable explanation
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class InvalidInputError(WritableTableError):
    """Raised when a table is built from a missing or unusable source."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid input: {reason}")


# ---------------------------------------------------------------------------
# Codec Exceptions
# ---------------------------------------------------------------------------


class CorruptDataError(WritableTableError):
    """
    Raised when a byte buffer cannot be decoded.

    Covers truncated buffers, invalid structural payloads, unknown
    justification codes and out-of-range configuration fields. Decoding
    is atomic: no partially built table is ever returned.

    Attributes:
        reason: What was wrong with the data
        offset: Byte offset where decoding stopped (if known)
    """

    def __init__(self, reason: str, offset: int | None = None) -> None:
        self.reason = reason
        self.offset = offset
        msg = f"Corrupt data: {reason}"
        if offset is not None:
            msg += f" (at byte {offset})"
        super().__init__(msg)
