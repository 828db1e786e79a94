"""
Canonical base64url transcoding (URL-safe alphabet, no padding on the wire).
"""

from __future__ import annotations

import base64
import binascii
import re

__all__ = ["Base64UrlError", "encode", "decode", "to_base64", "from_base64"]

_B64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


class Base64UrlError(ValueError):
    """Raised when a segment is not valid unpadded base64url."""


def from_base64(b64: str) -> str:
    """Convert standard base64 text to base64url: ``+``->``-``, ``/``->``_``, no ``=``."""
    return b64.replace("+", "-").replace("/", "_").rstrip("=")


def to_base64(b64url: str) -> str:
    """Convert base64url text back to padded standard base64.

    Padding is derived from the length mod 4: residue 2 gets ``==``,
    residue 3 gets ``=``, residue 0 needs none and residue 1 can never
    be produced by an encoder.

    Raises:
        Base64UrlError: On characters outside the URL-safe alphabet or a
            residue-1 length.
    """
    if not _B64URL_RE.match(b64url):
        raise Base64UrlError(f"Invalid base64url alphabet in segment: {b64url[:16]!r}")

    residue = len(b64url) % 4
    if residue == 1:
        raise Base64UrlError(f"Invalid base64url length ({len(b64url)} chars)")

    b64 = b64url.replace("-", "+").replace("_", "/")
    if residue == 2:
        b64 += "=="
    elif residue == 3:
        b64 += "="
    return b64


def encode(data: bytes) -> str:
    """Base64url-encode *data* without padding."""
    return from_base64(base64.b64encode(data).decode("ascii"))


def decode(segment: str) -> bytes:
    """Decode an unpadded base64url *segment* into bytes.

    Raises:
        Base64UrlError: If the segment is malformed.
    """
    b64 = to_base64(segment)
    try:
        return base64.b64decode(b64, validate=True)
    except binascii.Error as exc:
        raise Base64UrlError(f"Could not decode base64url segment: {exc}") from exc
