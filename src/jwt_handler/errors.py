"""
Error taxonomy and result types for decoding, validating and issuing tokens.

The low-level helpers raise ``TokenError``.  The public checking surface
(``TokenDecoder``, ``TokenValidator``, ``TokenIssuer``) converts it into a
result object so callers branch on ``result.ok`` instead of catching.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Token

__all__ = [
    "ErrorKind",
    "TokenError",
    "DecodeResult",
    "ValidationResult",
    "IssueResult",
]


class ErrorKind(Enum):
    """Terminal failure kinds.  Values are the stable user-facing messages."""

    INVALID_TOKEN_STRUCTURE = "E1: Invalid token structure."
    TOKEN_EXPIRED = "E2: Token expired."
    MISSING_REQUIRED_CLAIM = "E3: Missing required claim."
    INVALID_AUDIENCE = "E4: Invalid Audiance."
    TOKEN_NOT_BEFORE = "E5: Token Not Before."
    INVALID_TOKEN_TYPE = "E6: Invalid Token Type."
    INVALID_TOKEN_SIGNATURE = "E7: Invalid Token Signature."
    SERIALIZATION_FAILED = "E8: Token serialization failed."

    @property
    def code(self) -> str:
        """Short code, e.g. ``"E2"``."""
        return self.value.split(":", 1)[0]

    def __str__(self) -> str:
        return self.value


class TokenError(Exception):
    """Raised when a token cannot be decoded, validated or issued."""

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value} {detail}".strip())


# ---------------------------------------------------------------------------
# Discriminated results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DecodeResult:
    """Outcome of an unchecked decode: a token xor an error kind."""

    token: Token | None = None
    error: ErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of decode + policy evaluation: a token xor an error kind."""

    token: Token | None = None
    error: ErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class IssueResult:
    """Outcome of issuing: a compact token string xor an error kind."""

    raw_token: str | None = None
    error: ErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None
