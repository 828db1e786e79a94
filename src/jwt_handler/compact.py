"""
Compact serialization: three dot-separated segments.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ErrorKind, TokenError

__all__ = ["SEGMENT_COUNT", "CompactParts", "split", "join"]

SEGMENT_COUNT = 3


@dataclass(frozen=True)
class CompactParts:
    """The raw base64url segments of a compact token."""

    header: str
    payload: str
    signature: str  # may be empty (unsecured token)


def split(raw_token: str) -> CompactParts:
    """Split *raw_token* on ``'.'``.

    Raises:
        TokenError: ``INVALID_TOKEN_STRUCTURE`` unless there are exactly three segments.
    """
    parts = raw_token.split(".")
    if len(parts) != SEGMENT_COUNT:
        raise TokenError(
            ErrorKind.INVALID_TOKEN_STRUCTURE,
            f"expected {SEGMENT_COUNT} segments (header.payload.signature), got {len(parts)}",
        )
    return CompactParts(header=parts[0], payload=parts[1], signature=parts[2])


def join(header: str, payload: str, signature: str = "") -> str:
    return f"{header}.{payload}.{signature}"
