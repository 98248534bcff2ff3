#!/usr/bin/env python3
"""
Test runner for the smartlist backend.

Usage:
    python run_tests.py                  # Run all tests
    python run_tests.py unit             # Pipeline and service tests only
    python run_tests.py integration      # HTTP API tests only
    python run_tests.py -k optimizer     # Tests matching a keyword
    python run_tests.py --coverage       # Run with coverage report
    python run_tests.py --fast           # Skip slow tests
"""

import argparse
import subprocess
import sys
from pathlib import Path

SUITES = {
    "unit": "tests/unit",
    "integration": "tests/integration",
}


def build_command(args: argparse.Namespace) -> list[str]:
    cmd = [sys.executable, "-m", "pytest"]

    markers = []
    if args.test_type in SUITES:
        markers.append(args.test_type)
        cmd.append(SUITES[args.test_type])
    else:
        cmd.append("tests/")

    if args.fast:
        markers.append("not slow")
    if markers:
        cmd.extend(["-m", " and ".join(markers)])

    if args.keyword:
        cmd.extend(["-k", args.keyword])
    if args.verbose:
        cmd.append("-v")
    if args.failfast:
        cmd.append("-x")

    if args.coverage:
        cmd.extend([
            "--cov=smartlist",
            "--cov-report=term-missing",
            "--cov-report=html:coverage_html",
            "--cov-fail-under=80",
        ])

    return cmd


def main():
    parser = argparse.ArgumentParser(description="Run smartlist tests")
    parser.add_argument(
        "test_type",
        nargs="?",
        choices=["all", *SUITES],
        default="all",
        help="Which suite to run",
    )
    parser.add_argument("--keyword", "-k", help="Only run tests matching this expression")
    parser.add_argument("--coverage", "-c", action="store_true", help="Run with coverage report")
    parser.add_argument("--fast", "-f", action="store_true", help="Skip slow tests")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--failfast", "-x", action="store_true", help="Stop on first failure")

    args = parser.parse_args()
    cmd = build_command(args)

    print(f"Running: {' '.join(cmd)}")
    print("=" * 60)

    result = subprocess.run(cmd, cwd=Path(__file__).parent)

    if args.coverage and result.returncode == 0:
        print("\n" + "=" * 60)
        print("Coverage report generated: coverage_html/index.html")

    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
