"""
Claim-set models: Header, Body, Signature and Token.

Registered claims are declared once in ``HEADER_CLAIMS`` / ``BODY_CLAIMS``.
Parsing and serialization both derive from those lists; every member not
listed there lands in ``extra_claims`` untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union

from .errors import ErrorKind, TokenError

__all__ = [
    "JsonValue",
    "ClaimDef",
    "HEADER_CLAIMS",
    "BODY_CLAIMS",
    "Header",
    "Body",
    "Signature",
    "Token",
]

logger = logging.getLogger(__name__)

# Any value json.loads can produce.
JsonValue = Union[None, bool, int, float, str, list, dict]


# ---------------------------------------------------------------------------
# Claim definitions: drive parsing AND serialization from ONE list
# ---------------------------------------------------------------------------

STRING = "string"
NUMERIC_DATE = "numeric_date"
STRING_OR_LIST = "string_or_list"


class ClaimDef:
    """Maps a registered wire claim name onto a model attribute."""

    __slots__ = ("name", "attr", "kind")

    def __init__(self, name: str, attr: str, kind: str = STRING) -> None:
        self.name = name
        self.attr = attr
        self.kind = kind

    def __repr__(self) -> str:
        return f"ClaimDef({self.name!r} -> {self.attr}, {self.kind})"


# Order here is the serialization order.
HEADER_CLAIMS: list[ClaimDef] = [
    ClaimDef("alg", "algorithm"),
    ClaimDef("typ", "type"),
    ClaimDef("cty", "content_type"),
]

BODY_CLAIMS: list[ClaimDef] = [
    ClaimDef("iss", "issuer"),
    ClaimDef("sub", "subject"),
    ClaimDef("aud", "audience", STRING_OR_LIST),
    ClaimDef("exp", "expiration_time", NUMERIC_DATE),
    ClaimDef("nbf", "not_before", NUMERIC_DATE),
    ClaimDef("iat", "issued_at", NUMERIC_DATE),
    ClaimDef("jti", "jwt_id"),
]


def _structure_error(detail: str) -> TokenError:
    return TokenError(ErrorKind.INVALID_TOKEN_STRUCTURE, detail)


def _coerce(claim: ClaimDef, value: JsonValue) -> Any:
    """Check a registered claim's wire value and convert it to the model form."""
    if claim.kind == NUMERIC_DATE:
        # bool is an int subclass; floats cover 1.5, 1.0 and 1e9 alike.
        if isinstance(value, bool) or not isinstance(value, int):
            raise _structure_error(
                f"'{claim.name}' must be an integer NumericDate, got {value!r}"
            )
        return value

    if claim.kind == STRING_OR_LIST:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return tuple(value)
        raise _structure_error(
            f"'{claim.name}' must be a string or an array of strings, got {value!r}"
        )

    if not isinstance(value, str):
        raise _structure_error(f"'{claim.name}' must be a string, got {value!r}")
    return value


def _parse_claims(data: Any, claims: list[ClaimDef], label: str) -> dict[str, Any]:
    """Split a decoded JSON object into model kwargs plus ``extra_claims``."""
    if not isinstance(data, dict):
        raise _structure_error(f"{label} must be a JSON object, got {type(data).__name__}")

    kwargs: dict[str, Any] = {}
    registered = set()
    for claim in claims:
        registered.add(claim.name)
        value = data.get(claim.name)
        if value is not None:
            kwargs[claim.attr] = _coerce(claim, value)

    kwargs["extra_claims"] = {k: v for k, v in data.items() if k not in registered}
    return kwargs


def _serialize_claims(obj: Any, claims: list[ClaimDef]) -> dict[str, JsonValue]:
    """Build the wire-form JSON object, omitting absent claims."""
    out: dict[str, JsonValue] = {}
    for claim in claims:
        value = getattr(obj, claim.attr)
        if value is None:
            continue
        out[claim.name] = list(value) if claim.kind == STRING_OR_LIST else value

    for name, value in obj.extra_claims.items():
        if name in out or any(c.name == name for c in claims):
            logger.debug("Dropping extra claim %r that shadows a registered claim", name)
            continue
        out[name] = value
    return out


def _freeze(mapping: Mapping[str, JsonValue] | None) -> Mapping[str, JsonValue]:
    return MappingProxyType(dict(mapping or {}))


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Header:
    """JOSE header: ``typ``, ``cty``, ``alg`` plus any other members."""

    type: str | None = None
    content_type: str | None = None
    algorithm: str | None = None
    extra_claims: Mapping[str, JsonValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra_claims", _freeze(self.extra_claims))

    @classmethod
    def from_json_dict(cls, data: Any) -> Header:
        """Build a Header from a decoded JSON value.

        Raises:
            TokenError: ``INVALID_TOKEN_STRUCTURE`` if the value is not an
                object or a registered member has the wrong JSON type.
        """
        return cls(**_parse_claims(data, HEADER_CLAIMS, "header"))

    def to_json_dict(self) -> dict[str, JsonValue]:
        return _serialize_claims(self, HEADER_CLAIMS)


@dataclass(frozen=True)
class Body:
    """JWT claims set.

    ``audience`` is always a tuple internally, whether the wire form was a
    single string or an array.  ``expiration_time``, ``not_before`` and
    ``issued_at`` are integer epoch seconds.
    """

    issuer: str | None = None
    subject: str | None = None
    audience: tuple[str, ...] | None = None
    expiration_time: int | None = None
    not_before: int | None = None
    issued_at: int | None = None
    jwt_id: str | None = None
    extra_claims: Mapping[str, JsonValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.audience, str):
            object.__setattr__(self, "audience", (self.audience,))
        elif self.audience is not None:
            object.__setattr__(self, "audience", tuple(self.audience))
        object.__setattr__(self, "extra_claims", _freeze(self.extra_claims))

    @classmethod
    def from_json_dict(cls, data: Any) -> Body:
        """Build a Body from a decoded JSON value.

        Raises:
            TokenError: ``INVALID_TOKEN_STRUCTURE`` if the value is not an
                object, a NumericDate is not an integer, or a string claim
                has the wrong JSON type.
        """
        return cls(**_parse_claims(data, BODY_CLAIMS, "payload"))

    def to_json_dict(self) -> dict[str, JsonValue]:
        return _serialize_claims(self, BODY_CLAIMS)


@dataclass(frozen=True)
class Signature:
    """Opaque signature segment, kept as raw base64url text and never decoded."""

    raw: str


@dataclass(frozen=True)
class Token:
    header: Header = field(default_factory=Header)
    body: Body = field(default_factory=Body)
    signature: Signature | None = None

    @property
    def is_unsecured(self) -> bool:
        return self.signature is None
