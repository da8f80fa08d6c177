"""Command line entry point: ``timing2toggl input output``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from timing2toggl.config import load_settings
from timing2toggl.errors import ConversionError
from timing2toggl.logging_setup import setup_logging
from timing2toggl.pipeline import ConversionRequest, run_conversion, validate_paths
from timing2toggl.writer import STDOUT

EPILOG = """examples:
  timing2toggl examples/input.csv examples/output.csv
  timing2toggl -e foo@example.org -p "Test Project" examples/input.csv examples/output.csv
  timing2toggl -e foo@example.org examples/input.json - > toggl.csv
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timing2toggl",
        description="Convert Timing CSV/JSON exports to Toggl CSV files for import.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="Input file (Timing export, .csv or .json)")
    parser.add_argument("output", help="Output CSV file, or - for standard output")
    parser.add_argument("-e", "--email", help="Toggl account email")
    parser.add_argument("-p", "--project", help="Override project name")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    return parser


def _ask(prompt: str) -> str:
    # Prompts go to stderr; stdout may be carrying the converted CSV.
    print(prompt, end="", file=sys.stderr, flush=True)
    return sys.stdin.readline().rstrip("\n")


def _confirm_overwrite() -> bool:
    answer = _ask("Output file exist, overwrite? [y/N] ").strip().lower()
    return answer in ("y", "yes")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings().merged(email=args.email, project=args.project)
    setup_logging(args.log_level or settings.log_level)

    try:
        validate_paths(args.input, args.output)
    except ConversionError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if args.output != STDOUT and Path(args.output).exists():
        if not _confirm_overwrite():
            print("Execution aborted.", file=sys.stderr)
            return 0

    email = settings.email or _ask("Please enter your Toggl account email address: ").strip()

    request = ConversionRequest(
        input_path=args.input,
        output=args.output,
        email=email,
        project=settings.project,
    )
    return run_conversion(request)


if __name__ == "__main__":
    sys.exit(main())
