"""Breach check command-line flow.

Hashes the password locally, queries the range API with the 5-character
prefix and prints a verdict.
"""

import argparse
import os
import sys
from typing import Optional

from breach_check import (
    ValidationError,
    LookupResult,
    hash_credential,
    looks_like_digest,
    lookup_digest,
    format_breach_warning,
)
from core.siem import configure_logging, log_siem_event


EXIT_OK = 0
EXIT_LOOKUP_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwned-check",
        description="Check a password against known data breaches "
                    "(k-Anonymity: only a 5-character hash prefix is sent).",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-p", "--password", default="", help="Password to check (required)")
    source.add_argument("-H", "--hash", dest="digest", default="",
                        help="Pre-computed SHA-1 hash to check instead of a password")
    source.add_argument("-a", "--auto", default="",
                        help="Value treated as a hash if it looks like one, otherwise as a password")
    parser.add_argument("--range-url", default=None, help="Override the range API base URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show log output")
    return parser


def resolve_digest(args: argparse.Namespace) -> str:
    """Turn CLI input into a SHA-1 digest.

    Passwords are hashed from their original argv bytes, so arguments that
    are not valid UTF-8 still hash the way the shell passed them.

    Raises:
        ValidationError: If no input was given
    """
    if args.password:
        return hash_credential(os.fsencode(args.password))
    if args.digest:
        return args.digest
    if args.auto:
        if looks_like_digest(args.auto):
            return args.auto
        return hash_credential(os.fsencode(args.auto))
    raise ValidationError("Password not provided. Use -p <password>")


def render_result(result: LookupResult) -> str:
    """Format a lookup result for the terminal."""
    if result.found:
        lines = [f"⚠️  Password hash (prefix: {result.prefix}) was found in {result.count} breach(s)"]
        warning = format_breach_warning(result.count)
        if warning:
            lines.append(warning)
        return "\n".join(lines)
    return f"✅ Password hash (prefix: {result.prefix}) not found in any known breach."


def main(argv: Optional[list[str]] = None) -> int:
    """Run the checker. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        digest = resolve_digest(args)
        result = lookup_digest(digest, base_url=args.range_url)
    except ValidationError as e:
        print(f"Error: {e}")
        return EXIT_USAGE

    if not result.ok:
        log_siem_event("cli_lookup", "ERROR", details={"prefix": result.prefix})
        print(f"Error checking hash: {result.error}")
        return EXIT_LOOKUP_FAILED

    log_siem_event(
        "cli_lookup",
        "FOUND" if result.found else "NOT_FOUND",
        details={"prefix": result.prefix, "count": result.count}
    )
    print(render_result(result))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
