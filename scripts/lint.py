#!/usr/bin/env python3
"""
Linting helper for enginebench.

Runs ruff (check, fix, format) and bandit over the package and its tests.
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

DEFAULT_TARGETS = ["src", "tests", "scripts"]


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return True if successful."""
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        if result.stdout:
            print(result.stdout)
    except FileNotFoundError:
        print(f"Error: {cmd[0]} not found. Install the dev extra: pip install -e '.[dev]'")
        return False
    except subprocess.CalledProcessError as e:
        print(f"Error: {e}")
        if e.stdout:
            print("STDOUT:", e.stdout)
        if e.stderr:
            print("STDERR:", e.stderr)
        return False
    else:
        return True


def section(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(description="Run linting tools on the codebase")
    parser.add_argument("--check", action="store_true", help="Check code without fixing issues")
    parser.add_argument("--fix", action="store_true", help="Fix issues automatically where possible")
    parser.add_argument("--security", action="store_true", help="Run security checks with Bandit")
    parser.add_argument("--all", action="store_true", help="Run all checks and fixes")
    parser.add_argument("--files", nargs="*", help="Specific files to check")

    args = parser.parse_args()

    if not any([args.check, args.fix, args.security, args.all]):
        args.check = True  # Default to check mode

    os.chdir(Path(__file__).parent.parent)
    targets = args.files or DEFAULT_TARGETS
    ruff = [sys.executable, "-m", "ruff"]

    success = True

    if args.all or args.check:
        section("RUNNING RUFF LINTER (CHECK MODE)")
        success = run_command([*ruff, "check", *targets], "Ruff linter check") and success

    if args.all or args.fix:
        section("RUNNING RUFF LINTER (FIX MODE)")
        success = run_command([*ruff, "check", "--fix", *targets], "Ruff linter fix") and success

        section("RUNNING RUFF FORMATTER")
        success = run_command([*ruff, "format", *targets], "Ruff formatter") and success

    if args.all or args.security:
        section("RUNNING BANDIT SECURITY CHECKS")
        # Tests use assert and spawn subprocesses on purpose.
        cmd = [sys.executable, "-m", "bandit", "-r", "src"]
        if args.files:
            cmd = [sys.executable, "-m", "bandit", *args.files]
        success = run_command(cmd, "Bandit security check") and success

    if success:
        print("\n✅ All linting checks passed!")
        return 0
    print("\n❌ Some linting checks failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
