"""
Validation options, one record per claim family.

Every default is the most restrictive posture; relaxing a check has to be
spelled out by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

__all__ = [
    "DEFAULT_EXPECTED_TYPE",
    "TypeOptions",
    "ContentTypeOptions",
    "ExpirationOptions",
    "NotBeforeOptions",
    "AudienceOptions",
    "ValidationOptions",
]

DEFAULT_EXPECTED_TYPE = "JWT"


@dataclass(frozen=True)
class TypeOptions:
    """``typ`` header check.

    When enabled but not required, only tokens that carry ``typ`` are
    compared against *expected_type* (case-insensitive); tokens without it
    are assumed to be JWTs.
    """

    expected_type: str = DEFAULT_EXPECTED_TYPE
    claim_required: bool = False
    validation_enabled: bool = True


@dataclass(frozen=True)
class ContentTypeOptions:
    """``cty`` header check.  Off by default; only applied when ``cty`` is present."""

    validation_enabled: bool = False

    @property
    def expected_type(self) -> str:
        return DEFAULT_EXPECTED_TYPE


@dataclass(frozen=True)
class ExpirationOptions:
    clock_skew: timedelta = timedelta(0)
    claim_required: bool = True
    validation_enabled: bool = True


@dataclass(frozen=True)
class NotBeforeOptions:
    clock_skew: timedelta = timedelta(0)
    claim_required: bool = True
    validation_enabled: bool = True


@dataclass(frozen=True)
class AudienceOptions:
    """``aud`` check.

    A token is accepted only if *principal_audience* is one of its
    audiences.  A token without ``aud`` is rejected when the claim is
    required, and also when a principal is configured.
    """

    principal_audience: str | None = None
    claim_required: bool = True
    validation_enabled: bool = True


@dataclass(frozen=True)
class ValidationOptions:
    type: TypeOptions = field(default_factory=TypeOptions)
    content_type: ContentTypeOptions = field(default_factory=ContentTypeOptions)
    expiration: ExpirationOptions = field(default_factory=ExpirationOptions)
    not_before: NotBeforeOptions = field(default_factory=NotBeforeOptions)
    audience: AudienceOptions = field(default_factory=AudienceOptions)
    allow_unsecured: bool = False
