"""Decode, validate and issue compact-serialized JWTs."""

from .clock import Clock, FixedClock
from .decoder import TokenDecoder, decode_token
from .errors import DecodeResult, ErrorKind, IssueResult, TokenError, ValidationResult
from .issuer import TokenIssuer, encode_token
from .models import Body, Header, Signature, Token
from .options import (
    AudienceOptions,
    ContentTypeOptions,
    ExpirationOptions,
    NotBeforeOptions,
    TypeOptions,
    ValidationOptions,
)
from .policy import evaluate
from .validator import TokenValidator

__version__ = "1.0.0"

__all__ = [
    "AudienceOptions",
    "Body",
    "Clock",
    "ContentTypeOptions",
    "DecodeResult",
    "ErrorKind",
    "ExpirationOptions",
    "FixedClock",
    "Header",
    "IssueResult",
    "NotBeforeOptions",
    "Signature",
    "Token",
    "TokenDecoder",
    "TokenError",
    "TokenIssuer",
    "TokenValidator",
    "TypeOptions",
    "ValidationOptions",
    "ValidationResult",
    "decode_token",
    "encode_token",
    "evaluate",
]
