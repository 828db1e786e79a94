"""
Configuration loading and validation for the token validator.

Supports:
  - YAML config file (``validation:`` section)
  - Environment variable overrides (JWT_PRINCIPAL_AUDIENCE, JWT_ALLOW_UNSECURED)
  - CLI argument merging via merge_cli_overrides()

Anything not set falls back to the secure defaults in ``options.py``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from .options import (
    DEFAULT_EXPECTED_TYPE,
    AudienceOptions,
    ContentTypeOptions,
    ExpirationOptions,
    NotBeforeOptions,
    TypeOptions,
    ValidationOptions,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "PROJECT_ROOT",
    "ENV_PRINCIPAL_AUDIENCE",
    "ENV_ALLOW_UNSECURED",
    "ConfigError",
    "load_config",
    "parse_validation_options",
    "merge_cli_overrides",
]

logger = logging.getLogger(__name__)

# Project root directory (src/jwt_handler/ -> project root)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

# Environment variable names
ENV_PRINCIPAL_AUDIENCE = "JWT_PRINCIPAL_AUDIENCE"
ENV_ALLOW_UNSECURED = "JWT_ALLOW_UNSECURED"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


# ---------------------------------------------------------------------------
# Typed field readers
# ---------------------------------------------------------------------------

def _section(raw: dict, key: str, parent: str) -> dict:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{parent}.{key} must be a mapping, got {type(value).__name__}")
    return value


def _bool(section: dict, key: str, default: bool, label: str) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{label}.{key} must be true or false, got {value!r}")
    return value


def _skew(section: dict, label: str) -> timedelta:
    value = section.get("clock_skew_seconds", 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{label}.clock_skew_seconds must be a non-negative integer, got {value!r}")
    return timedelta(seconds=value)


def _optional_str(section: dict, key: str, label: str) -> str | None:
    value = section.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{label}.{key} must be a string, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def parse_validation_options(raw: dict[str, Any]) -> ValidationOptions:
    """Build ``ValidationOptions`` from the ``validation:`` section of a config dict.

    Raises:
        ConfigError: If a value has the wrong type.
    """
    v = _section(raw, "validation", "config")

    typ = _section(v, "type", "validation")
    cty = _section(v, "content_type", "validation")
    exp = _section(v, "expiration", "validation")
    nbf = _section(v, "not_before", "validation")
    aud = _section(v, "audience", "validation")

    expected_type = _optional_str(typ, "expected", "validation.type") or DEFAULT_EXPECTED_TYPE

    return ValidationOptions(
        type=TypeOptions(
            expected_type=expected_type,
            claim_required=_bool(typ, "required", False, "validation.type"),
            validation_enabled=_bool(typ, "enabled", True, "validation.type"),
        ),
        content_type=ContentTypeOptions(
            validation_enabled=_bool(cty, "enabled", False, "validation.content_type"),
        ),
        expiration=ExpirationOptions(
            clock_skew=_skew(exp, "validation.expiration"),
            claim_required=_bool(exp, "required", True, "validation.expiration"),
            validation_enabled=_bool(exp, "enabled", True, "validation.expiration"),
        ),
        not_before=NotBeforeOptions(
            clock_skew=_skew(nbf, "validation.not_before"),
            claim_required=_bool(nbf, "required", True, "validation.not_before"),
            validation_enabled=_bool(nbf, "enabled", True, "validation.not_before"),
        ),
        audience=AudienceOptions(
            principal_audience=_optional_str(aud, "principal", "validation.audience"),
            claim_required=_bool(aud, "required", True, "validation.audience"),
            validation_enabled=_bool(aud, "enabled", True, "validation.audience"),
        ),
        allow_unsecured=_bool(v, "allow_unsecured", False, "validation"),
    )


def _apply_env_overrides(options: ValidationOptions) -> ValidationOptions:
    principal = os.environ.get(ENV_PRINCIPAL_AUDIENCE)
    if principal:
        options = replace(options, audience=replace(options.audience, principal_audience=principal))

    unsecured = os.environ.get(ENV_ALLOW_UNSECURED)
    if unsecured is not None:
        options = replace(options, allow_unsecured=unsecured.strip().lower() in _TRUTHY)

    return options


def load_config(config_path: str) -> ValidationOptions:
    """Load and validate the YAML configuration file.

    Environment variables take precedence over YAML values:
      - JWT_PRINCIPAL_AUDIENCE -> validation.audience.principal
      - JWT_ALLOW_UNSECURED    -> validation.allow_unsecured

    Raises:
        ConfigError: If the config file is missing or contains invalid values.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(
            f"Config file not found: {config_path}\n"
            "Copy config/config.yaml.example to config/config.yaml and adjust it."
        )

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Could not parse {config_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config file format: expected YAML mapping, got {type(raw).__name__}")

    options = _apply_env_overrides(parse_validation_options(raw))

    logger.debug("Config loaded from %s", config_path)
    return options


# ---------------------------------------------------------------------------
# CLI override merging
# ---------------------------------------------------------------------------

def merge_cli_overrides(options: ValidationOptions, args) -> ValidationOptions:
    """Merge CLI arguments over loaded options, returning a new ValidationOptions.

    ``args`` is expected to have ``audience`` and ``allow_unsecured``
    attributes matching argparse output; ``None``/``False`` leaves the
    loaded value in place.
    """
    audience = getattr(args, "audience", None)
    if audience is not None:
        options = replace(options, audience=replace(options.audience, principal_audience=audience))

    if getattr(args, "allow_unsecured", False):
        options = replace(options, allow_unsecured=True)

    return options
