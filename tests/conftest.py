"""Shared fixtures for the jwt-handler test suite."""

from __future__ import annotations

import json
from typing import Callable

import pytest

from jwt_handler import base64url
from jwt_handler.clock import FixedClock
from jwt_handler.options import (
    AudienceOptions,
    ExpirationOptions,
    NotBeforeOptions,
    ValidationOptions,
)

# RFC 7519 section 3.1 example: {"typ":"JWT",\r\n "alg":"HS256"} /
# {"iss":"joe",\r\n "exp":1300819380,\r\n "http://example.com/is_root":true}
RFC_EXAMPLE_TOKEN = (
    "eyJ0eXAiOiJKV1QiLA0KICJhbGciOiJIUzI1NiJ9"
    ".eyJpc3MiOiJqb2UiLA0KICJleHAiOjEzMDA4MTkzODAsDQogImh0dHA6Ly9leGFtcGxlLmNvbS9pc19yb290Ijp0cnVlfQ"
    ".dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
)

# RFC 7519 section 6.1 example unsecured token: {"alg":"none"}
RFC_UNSECURED_TOKEN = (
    "eyJhbGciOiJub25lIn0"
    ".eyJpc3MiOiJqb2UiLA0KICJleHAiOjEzMDA4MTkzODAsDQogImh0dHA6Ly9leGFtcGxlLmNvbS9pc19yb290Ijp0cnVlfQ"
    "."
)

RFC_EXAMPLE_EXP = 1300819380

NOW = 1_700_000_000


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def lenient_options() -> ValidationOptions:
    """Default options with the exp, nbf and aud checks switched off."""
    return ValidationOptions(
        expiration=ExpirationOptions(validation_enabled=False),
        not_before=NotBeforeOptions(validation_enabled=False),
        audience=AudienceOptions(validation_enabled=False),
    )


@pytest.fixture
def make_raw() -> Callable[..., str]:
    """Build a compact token from header/claims dicts (or raw JSON text)."""

    def _make(header=None, claims=None, signature: str = "c2lnbmF0dXJl") -> str:
        def seg(part) -> str:
            if part is None:
                part = {}
            text = part if isinstance(part, str) else json.dumps(part)
            return base64url.encode(text.encode("utf-8"))

        return f"{seg(header if header is not None else {'typ': 'JWT', 'alg': 'HS256'})}.{seg(claims)}.{signature}"

    return _make
