# utils.py
# Shared exceptions and digest helpers

from __future__ import annotations

import hmac


class HashError(Exception):
    """Base class for every error raised by this package."""


class UnsupportedAlgorithmError(HashError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported algorithm: {name!r}")
        self.name = name


class InvalidInputError(HashError, TypeError): ...


class ExportError(HashError): ...


class HashMismatchError(HashError):
    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class EngineFinalizedError(HashError):
    """Raised when a finalized engine is fed or finalized again."""


def ensure_bytes(obj: object) -> bytes:
    """Accepts any bytes-like object, refuses text."""
    if isinstance(obj, str):
        raise InvalidInputError("Strings must be encoded before hashing")
    try:
        return bytes(memoryview(obj))  # type: ignore[arg-type]
    except TypeError:
        raise InvalidInputError(
            f"object supporting the buffer API required, got {type(obj).__name__}"
        ) from None


def normalize_hex(digest: str) -> str:
    return digest.strip().lower()


def compare_hex(a: str, b: str) -> bool:
    """Case-insensitive, whitespace-tolerant, constant-time comparison."""
    a, b = normalize_hex(a), normalize_hex(b)
    # compare_digest only accepts ASCII text
    if not (a.isascii() and b.isascii()):
        return False
    return hmac.compare_digest(a, b)
