#!/usr/bin/env python3
"""
Signup test data tool

Prints generated signup profiles as JSON, or checks a password against the
strength rule used by the signup flow.

Usage:
    signup-data --count 3 --seed 42
    signup-data --fixture my_data.json
    signup-data --check 'Passw0rdA!'
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from signup_flow.config import DEFAULT_TEST_DATA
from signup_flow.errors import SignupSuiteError
from signup_flow.signup_data import TestDataProvider, is_secure_password

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signup-data",
        description="Generate signup test data profiles",
    )
    parser.add_argument(
        "--fixture", type=Path, default=DEFAULT_TEST_DATA,
        help="JSON test data record (default: packaged fixture)",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible values")
    parser.add_argument("--count", type=int, default=1, help="Number of profiles")
    parser.add_argument("--check", metavar="PASSWORD", help="Validate a password and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.check is not None:
        ok = is_secure_password(args.check)
        print("valid" if ok else "invalid: needs 8+ characters, a letter and a digit")
        return 0 if ok else 1

    if args.count < 1:
        print("--count must be at least 1", file=sys.stderr)
        return 2

    provider = TestDataProvider(fixture_path=args.fixture, seed=args.seed)
    try:
        profiles = [provider.get_test_data().as_dict() for _ in range(args.count)]
    except SignupSuiteError as e:
        logger.error("Could not generate test data: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(profiles[0] if args.count == 1 else profiles, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
