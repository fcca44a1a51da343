"""Error types raised by memefx operations.

Every failure is a ``MemeFxError``. The ``name`` attribute carries the error
kind so callers can branch on it without importing every subclass.
"""

INVALID_INPUT = "InvalidInput"
DECODE_FAILURE = "DecodeFailure"
ENCODE_FAILURE = "EncodeFailure"
ASSET_NOT_FOUND = "AssetNotFound"


class MemeFxError(Exception):
    """Base error with a human-readable message and a kind label."""

    name = "MemeFxError"

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.message = message
        if name is not None:
            self.name = name


class InvalidInput(MemeFxError):
    name = INVALID_INPUT


class DecodeFailure(MemeFxError):
    name = DECODE_FAILURE


class EncodeFailure(MemeFxError):
    name = ENCODE_FAILURE


class AssetNotFound(MemeFxError):
    name = ASSET_NOT_FOUND
