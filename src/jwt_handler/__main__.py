"""
Top-level entry point: python -m jwt_handler <subcommand>

Subcommands:
    decode    inspect a token without any checks
    validate  decode and run the claim validation policy
    issue     serialize header + claims into a compact token
"""

import sys


USAGE = """\
usage: python -m jwt_handler <command>

commands:
  decode    Decode a compact token and print header, payload and signature
  validate  Decode a token and check typ/cty/exp/nbf/aud and signature presence
  issue     Build an (unsigned) compact token from header and claims JSON

Run 'python -m jwt_handler <command> --help' for command-specific options.
"""


def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    command = sys.argv[1]
    argv = sys.argv[2:]

    if command == "decode":
        from .cli import decode_main
        decode_main(argv)
    elif command == "validate":
        from .cli import validate_main
        validate_main(argv)
    elif command == "issue":
        from .cli import issue_main
        issue_main(argv)
    else:
        print(f"Unknown command: {command}\n")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
