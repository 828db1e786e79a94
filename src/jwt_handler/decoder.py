"""
Token decoding: compact string -> Token, without any policy checks.

``decode_token()`` raises ``TokenError``; ``TokenDecoder.try_decode()``
returns a ``DecodeResult`` instead.
"""

from __future__ import annotations

import json
import logging

from . import base64url, compact
from .errors import DecodeResult, ErrorKind, TokenError
from .models import Body, Header, Signature, Token

__all__ = ["decode_token", "TokenDecoder"]

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> object:
    raise ValueError(f"{name} is not valid JSON")


def _decode_segment(segment: str, label: str) -> object:
    """Base64url-decode a segment and parse it as strict JSON.

    ``json.loads`` keeps the last occurrence of a duplicated member name.
    ``NaN`` / ``Infinity`` literals and nesting beyond the interpreter's
    recursion limit are structural errors.
    """
    try:
        raw = base64url.decode(segment)
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        # Base64UrlError and json.JSONDecodeError are both ValueErrors
        raise TokenError(
            ErrorKind.INVALID_TOKEN_STRUCTURE, f"could not decode {label}: {exc}"
        ) from exc


def decode_token(raw_token: str) -> Token:
    """Decode a compact token into its Header, Body and Signature.

    Signature bytes are not decoded or verified; an empty third segment
    yields ``signature=None``.

    Raises:
        TokenError: ``INVALID_TOKEN_STRUCTURE`` on a wrong segment count,
            invalid base64url, invalid JSON, or mistyped registered claims.
    """
    parts = compact.split(raw_token)

    header = Header.from_json_dict(_decode_segment(parts.header, "header"))
    body = Body.from_json_dict(_decode_segment(parts.payload, "payload"))
    signature = Signature(parts.signature) if parts.signature else None

    return Token(header=header, body=body, signature=signature)


class TokenDecoder:
    """Unchecked decoding with a result object instead of exceptions."""

    def try_decode(self, raw_token: str) -> DecodeResult:
        try:
            token = decode_token(raw_token)
        except TokenError as exc:
            logger.debug("Token decode failed: %s", exc)
            return DecodeResult(error=exc.kind, detail=exc.detail)
        return DecodeResult(token=token)
