"""
Token issuing: Token -> compact string.

No signing is performed.  The third segment is empty unless the token
already carries a signature segment computed elsewhere.
"""

from __future__ import annotations

import json
import logging

from . import base64url, compact
from .errors import ErrorKind, IssueResult, TokenError
from .models import Token

__all__ = ["encode_token", "TokenIssuer"]

logger = logging.getLogger(__name__)


def _encode_json(obj: dict, label: str) -> str:
    try:
        text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        data = text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise TokenError(
            ErrorKind.SERIALIZATION_FAILED, f"could not serialize {label}: {exc}"
        ) from exc
    return base64url.encode(data)


def encode_token(token: Token) -> str:
    """Serialize *token* into compact form.

    Raises:
        TokenError: ``SERIALIZATION_FAILED`` if a claim value is not JSON-serializable.
    """
    header = _encode_json(token.header.to_json_dict(), "header")
    body = _encode_json(token.body.to_json_dict(), "payload")
    signature = token.signature.raw if token.signature is not None else ""
    return compact.join(header, body, signature)


class TokenIssuer:
    """Issues compact tokens, reporting failures as an ``IssueResult``."""

    def issue(self, token: Token) -> IssueResult:
        try:
            raw_token = encode_token(token)
        except TokenError as exc:
            logger.warning("Token issue failed: %s", exc)
            return IssueResult(error=exc.kind, detail=exc.detail)
        return IssueResult(raw_token=raw_token)
