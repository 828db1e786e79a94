"""
Decode + validate in one call.
"""

from __future__ import annotations

import logging

from .clock import Clock
from .decoder import decode_token
from .errors import ErrorKind, TokenError, ValidationResult
from .options import ValidationOptions
from .policy import evaluate

__all__ = ["TokenValidator"]

logger = logging.getLogger(__name__)


class TokenValidator:
    """Decodes compact tokens and runs the validation policy on them.

    Holds only read-only state (options and clock), so one instance can
    be shared across threads as long as the clock is thread-safe.
    """

    def __init__(
        self,
        options: ValidationOptions | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.options = options or ValidationOptions()
        self.clock = clock or Clock()

    def validate(self, raw_token: str) -> ValidationResult:
        """Return the validated token, or the first error encountered."""
        try:
            token = decode_token(raw_token)
        except TokenError as exc:
            logger.debug("Token rejected: %s", exc)
            return ValidationResult(error=exc.kind, detail=exc.detail)

        error: ErrorKind | None = evaluate(token, self.options, self.clock.now())
        if error is not None:
            logger.debug("Token rejected: %s", error)
            return ValidationResult(error=error)

        return ValidationResult(token=token)
