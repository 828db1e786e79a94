"""
CLI commands for jwt-handler.

Each command accepts the token directly, via stdin (for piping), or from
an interactive prompt when neither is given.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .clock import Clock, FixedClock
from .config import DEFAULT_CONFIG_PATH, ConfigError, load_config, merge_cli_overrides
from .decoder import TokenDecoder
from .errors import TokenError
from .issuer import TokenIssuer
from .logging_setup import setup_logging
from .models import Body, Header, Signature, Token
from .options import ValidationOptions
from .validator import TokenValidator

__all__ = ["decode_main", "validate_main", "issue_main"]

logger = logging.getLogger(__name__)

DEFAULT_ISSUE_HEADER = '{"alg": "none", "typ": "JWT"}'


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _print_json(label: str, data: dict) -> None:
    """Print a labelled JSON section."""
    print(f"\n{label}:")
    print(json.dumps(data, indent=4))


def _print_token(token: Token) -> None:
    """Pretty-print the decoded token parts."""
    _print_json("Header", token.header.to_json_dict())
    _print_json("Payload", token.body.to_json_dict())
    signature = token.signature.raw if token.signature else "(none, unsecured token)"
    print(f"\nSignature (base64url encoded):\n{signature}")


# ---------------------------------------------------------------------------
# Shared argument handling
# ---------------------------------------------------------------------------

def _add_token_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="Compact token string (optional; prompts interactively if omitted)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        default=False,
        help="Read token from stdin (for piping)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", default=False,
                        help="Enable verbose (debug) logging")


def _read_token(args: argparse.Namespace) -> str:
    if args.stdin:
        token = sys.stdin.read().strip()
        if not token:
            print("Error: No token received on stdin.")
            sys.exit(1)
        return token

    if args.token:
        return args.token.strip()

    # Interactive mode
    print("JWT Token Decoder")
    print("=================")
    try:
        return input("Please enter your JWT token: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(130)


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------

def decode_main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="jwt-handler decode",
        description="Decode and inspect a token without validating any claim.",
        epilog="Examples:\n"
               "  %(prog)s                          # interactive prompt\n"
               "  %(prog)s <token>                   # pass token as argument\n"
               "  echo '<token>' | %(prog)s --stdin  # read from stdin\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_token_args(parser)
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    result = TokenDecoder().try_decode(_read_token(args))
    if not result.ok:
        print(f"Error: {result.error} {result.detail}".rstrip())
        sys.exit(1)

    _print_token(result.token)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

def _load_options(config_path: str | None) -> ValidationOptions:
    """Explicit --config must exist; the default path is optional."""
    if config_path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            logger.debug("No config at %s, using secure defaults", DEFAULT_CONFIG_PATH)
            return ValidationOptions()
        config_path = DEFAULT_CONFIG_PATH
    return load_config(config_path)


def validate_main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="jwt-handler validate",
        description="Decode a token and check its claims against the validation policy. "
                    "Signatures are never verified, only their presence.",
    )
    _add_token_args(parser)
    parser.add_argument("--config", "-c", default=None,
                        help=f"Path to YAML config file (default: {DEFAULT_CONFIG_PATH} if present)")
    parser.add_argument("--now", type=int, default=None, metavar="EPOCH",
                        help="Validate as of this epoch second instead of the wall clock")
    parser.add_argument("--audience", "-a", default=None,
                        help="Principal audience (overrides config)")
    parser.add_argument("--allow-unsecured", action="store_true", default=False,
                        help="Accept tokens with no signature and alg 'none'")
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        options = merge_cli_overrides(_load_options(args.config), args)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    clock = FixedClock(args.now) if args.now is not None else Clock()
    result = TokenValidator(options, clock).validate(_read_token(args))
    if not result.ok:
        print(f"Invalid: {result.error} {result.detail}".rstrip())
        sys.exit(1)

    print("Valid token.")
    _print_token(result.token)


# ---------------------------------------------------------------------------
# issue
# ---------------------------------------------------------------------------

def _parse_json_arg(text: str, label: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Error: --{label} is not valid JSON: {exc}")
        sys.exit(1)


def issue_main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="jwt-handler issue",
        description="Serialize a header and claims set into a compact token (no signing).",
        epilog="Examples:\n"
               "  %(prog)s --claims '{\"iss\": \"joe\", \"exp\": 1300819380}'\n"
               "  %(prog)s --header '{\"alg\": \"HS256\"}' --claims '{}' --signature <seg>\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--header", default=DEFAULT_ISSUE_HEADER,
                        help=f"Header JSON object (default: {DEFAULT_ISSUE_HEADER})")
    parser.add_argument("--claims", default="{}", help="Claims set JSON object (default: {})")
    parser.add_argument("--signature", default="",
                        help="Pre-computed base64url signature segment (default: empty)")
    parser.add_argument("--verbose", "-v", action="store_true", default=False,
                        help="Enable verbose (debug) logging")
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        header = Header.from_json_dict(_parse_json_arg(args.header, "header"))
        body = Body.from_json_dict(_parse_json_arg(args.claims, "claims"))
    except TokenError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    signature = Signature(args.signature) if args.signature else None
    result = TokenIssuer().issue(Token(header=header, body=body, signature=signature))
    if not result.ok:
        print(f"Error: {result.error} {result.detail}".rstrip())
        sys.exit(1)

    print(result.raw_token)
