#!/usr/bin/env python
"""Local quality checks and tests runner with auto-fix capabilities.

Usage:
    python run_quality_checks.py                    # Run all checks (no fixes)
    python run_quality_checks.py --fix              # Run all checks + auto fixes
    python run_quality_checks.py --fix --skip lint  # Fix but skip linting
    python run_quality_checks.py --verbose          # Detailed output
"""

import argparse
import subprocess
import sys

# Directories to check
PACKAGE_DIR = "sysgpio"
TESTS_DIR = "tests"
DIRS_TO_CHECK = [PACKAGE_DIR, TESTS_DIR]


class CheckRunner:
    """Runs quality checks and tests with optional auto-fixes."""

    def __init__(self, fix: bool = False, verbose: bool = False, skip_checks: list[str] | None = None):
        self.fix = fix
        self.verbose = verbose
        self.skip_checks = skip_checks or []
        self.failed_checks: list[str] = []
        self.passed_checks: list[str] = []

    def run_command(self, cmd: list[str], key: str, name: str) -> bool:
        """Run a command and record whether it succeeded.

        Args:
            cmd: Command and arguments as list
            key: Short name used with --skip
            name: Friendly name for the check

        Returns:
            True if command succeeded or was skipped, False otherwise
        """
        if key in self.skip_checks:
            print(f"[skip] {name}")
            return True

        print(f"\n{'=' * 70}")
        print(f"[run]  {name}")
        print(f"{'=' * 70}")

        try:
            if self.verbose:
                result = subprocess.run(cmd, check=False)
            else:
                result = subprocess.run(cmd, check=False, capture_output=True, text=True)
                if result.returncode != 0:
                    print(result.stdout)
                    print(result.stderr)
        except FileNotFoundError as e:
            print(f"[fail] {name}: {e}")
            print('       Install the dev tools with: pip install -e ".[dev]"')
            self.failed_checks.append(name)
            return False

        if result.returncode == 0:
            print(f"[ok]   {name}")
            self.passed_checks.append(name)
            return True

        print(f"[fail] {name}")
        self.failed_checks.append(name)
        return False

    def checks(self) -> list[tuple[str, str, list[str]]]:
        black = ["black", *DIRS_TO_CHECK] if self.fix else ["black", "--check", *DIRS_TO_CHECK]
        isort = ["isort", *DIRS_TO_CHECK] if self.fix else ["isort", "--check-only", *DIRS_TO_CHECK]
        return [
            ("formatting", "Black formatting", black),
            ("imports", "isort import ordering", isort),
            ("lint", "Pylint", ["pylint", PACKAGE_DIR]),
            ("type", "Mypy", ["mypy", PACKAGE_DIR]),
            ("deadcode", "Vulture dead code", ["vulture", PACKAGE_DIR]),
            ("complexity", "Radon complexity", ["radon", "cc", PACKAGE_DIR, "-a"]),
            (
                "tests",
                "Pytest + coverage",
                ["pytest", f"--cov={PACKAGE_DIR}", "--cov-report=term-missing", TESTS_DIR],
            ),
        ]

    def print_summary(self) -> None:
        print(f"\n{'=' * 70}")
        print("SUMMARY")
        print(f"{'=' * 70}")
        for check in self.passed_checks:
            print(f"  passed: {check}")
        for check in self.failed_checks:
            print(f"  FAILED: {check}")
        if not self.failed_checks:
            print("\nAll checks passed!")

    def run_all(self) -> int:
        """Run all checks in order.

        Returns:
            0 if all checks passed, non-zero otherwise
        """
        for key, name, cmd in self.checks():
            self.run_command(cmd, key, name)

        self.print_summary()
        return 0 if not self.failed_checks else 1


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run local quality checks and tests with optional auto-fixes",
    )
    parser.add_argument(
        "--fix",
        "--apply",
        action="store_true",
        dest="fix",
        help="Automatically fix issues (formatting, imports) where possible",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output from all commands",
    )
    parser.add_argument(
        "--skip",
        nargs="+",
        default=[],
        help="Skip specific checks (formatting, imports, lint, type, deadcode, complexity, tests)",
    )
    args = parser.parse_args()

    runner = CheckRunner(fix=args.fix, verbose=args.verbose, skip_checks=args.skip)
    return runner.run_all()


if __name__ == "__main__":
    sys.exit(main())
