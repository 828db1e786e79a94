"""
Claim validation policy engine.

``evaluate()`` runs the enabled rules in a fixed order against a decoded
token and returns the first violated rule's ``ErrorKind`` (or ``None``).
It is a pure function of the token, the options and the current epoch;
the signature bytes are never examined, only their presence.

Rule order:
    1. content type (``cty``)
    2. type (``typ``)
    3. expiration (``exp``)
    4. not before (``nbf``)
    5. audience (``aud``)
    6. signature presence
"""

from __future__ import annotations

import logging
from typing import Callable

from .clock import Clock, FixedClock
from .errors import ErrorKind
from .models import Token
from .options import ValidationOptions

__all__ = [
    "RULES",
    "evaluate",
    "check_content_type",
    "check_type",
    "check_expiration",
    "check_not_before",
    "check_audience",
    "check_signature",
]

logger = logging.getLogger(__name__)

UNSECURED_ALGORITHM = "none"

Rule = Callable[[Token, ValidationOptions, Clock], "ErrorKind | None"]


def _same_type(actual: str, expected: str) -> bool:
    return actual.upper() == expected.upper()


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def check_content_type(token: Token, options: ValidationOptions, clock: Clock) -> ErrorKind | None:
    opts = options.content_type
    if not opts.validation_enabled:
        return None

    cty = token.header.content_type
    if cty is not None and not _same_type(cty, opts.expected_type):
        logger.debug("%s (token cty: %r, expected: %r)", ErrorKind.INVALID_TOKEN_TYPE, cty, opts.expected_type)
        return ErrorKind.INVALID_TOKEN_TYPE
    return None


def check_type(token: Token, options: ValidationOptions, clock: Clock) -> ErrorKind | None:
    opts = options.type
    if not opts.validation_enabled:
        return None

    typ = token.header.type
    if typ is None:
        return ErrorKind.MISSING_REQUIRED_CLAIM if opts.claim_required else None

    if not _same_type(typ, opts.expected_type):
        logger.debug("%s (token typ: %r, expected: %r)", ErrorKind.INVALID_TOKEN_TYPE, typ, opts.expected_type)
        return ErrorKind.INVALID_TOKEN_TYPE
    return None


def check_expiration(token: Token, options: ValidationOptions, clock: Clock) -> ErrorKind | None:
    opts = options.expiration
    if not opts.validation_enabled:
        return None

    exp = token.body.expiration_time
    if exp is None:
        return ErrorKind.MISSING_REQUIRED_CLAIM if opts.claim_required else None

    # Exclusive: the boundary second itself is already expired.
    boundary = clock.expiration_epoch(opts.clock_skew)
    if exp <= boundary:
        logger.debug("%s (token exp: %d, expiration epoch: %d)", ErrorKind.TOKEN_EXPIRED, exp, boundary)
        return ErrorKind.TOKEN_EXPIRED
    return None


def check_not_before(token: Token, options: ValidationOptions, clock: Clock) -> ErrorKind | None:
    opts = options.not_before
    if not opts.validation_enabled:
        return None

    nbf = token.body.not_before
    if nbf is None:
        return ErrorKind.MISSING_REQUIRED_CLAIM if opts.claim_required else None

    # Inclusive: a token becomes valid on the boundary second.
    boundary = clock.not_before_epoch(opts.clock_skew)
    if nbf > boundary:
        logger.debug("%s (token nbf: %d, not-before epoch: %d)", ErrorKind.TOKEN_NOT_BEFORE, nbf, boundary)
        return ErrorKind.TOKEN_NOT_BEFORE
    return None


def check_audience(token: Token, options: ValidationOptions, clock: Clock) -> ErrorKind | None:
    opts = options.audience
    if not opts.validation_enabled:
        return None

    audience = token.body.audience
    if audience is None:
        if opts.claim_required:
            return ErrorKind.MISSING_REQUIRED_CLAIM
        if opts.principal_audience is not None:
            logger.debug("%s (token has no aud, principal: %r)", ErrorKind.INVALID_AUDIENCE, opts.principal_audience)
            return ErrorKind.INVALID_AUDIENCE
        return None

    if opts.principal_audience not in audience:
        logger.debug("%s (token aud: %r, principal: %r)", ErrorKind.INVALID_AUDIENCE, audience, opts.principal_audience)
        return ErrorKind.INVALID_AUDIENCE
    return None


def check_signature(token: Token, options: ValidationOptions, clock: Clock) -> ErrorKind | None:
    if token.signature is not None:
        return None

    if not options.allow_unsecured:
        logger.debug("%s (no signature, unsecured tokens not allowed)", ErrorKind.INVALID_TOKEN_SIGNATURE)
        return ErrorKind.INVALID_TOKEN_SIGNATURE

    alg = token.header.algorithm
    if alg is None or alg.lower() != UNSECURED_ALGORITHM:
        logger.debug("%s (no signature, alg: %r)", ErrorKind.INVALID_TOKEN_SIGNATURE, alg)
        return ErrorKind.INVALID_TOKEN_SIGNATURE
    return None


RULES: tuple[Rule, ...] = (
    check_content_type,
    check_type,
    check_expiration,
    check_not_before,
    check_audience,
    check_signature,
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def evaluate(token: Token, options: ValidationOptions, now: int) -> ErrorKind | None:
    """Run every rule in order; return the first failure or ``None``.

    *now* is the current epoch in seconds, read once by the caller so all
    rules see the same instant.
    """
    clock = FixedClock(now)
    for rule in RULES:
        error = rule(token, options, clock)
        if error is not None:
            return error
    return None
