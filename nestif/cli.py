"""
Command-line interface for nestif.

Checks Go files, directories, ``dir/...`` trees or import paths and prints
the if statements whose nesting complexity reaches the threshold.
"""

from __future__ import annotations

import argparse
import sys
from typing import IO, Any, Dict, List, Optional

from nestif import __version__
from nestif.core.config import Config
from nestif.core.engine import CheckEngine
from nestif.core.errors import ConfigError
from nestif.reporting import format_json, format_text, sort_issues
from nestif.utils.log import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nestif",
        description="Detect deeply nested if statements in Go source code.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nestif                        # Check every package below the current directory
  nestif ./...                  # Same as above
  nestif foo.go                 # Check a single file
  nestif ./pkg --min 4          # Only statements with complexity 4 or more
  nestif ./... --json           # Emit JSON
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        help="Go files, directories, dir/... patterns or import paths",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--json",
        dest="out_json",
        action="store_true",
        default=None,
        help="Emit a JSON array of {Pos, Complexity, Message} objects (ignores --top)",
    )
    parser.add_argument(
        "--min",
        dest="min_complexity",
        type=int,
        help="Minimum complexity to show (default: 1)",
    )
    parser.add_argument(
        "--top",
        type=int,
        help="Show only the top N most complex if statements (default: 10)",
    )
    parser.add_argument(
        "--skip-nil-guards",
        action="store_true",
        default=None,
        help='Leave simple "if err != nil" checks out of the calculation',
    )
    parser.add_argument(
        "-e", "--exclude-dirs",
        action="append",
        metavar="REGEXP",
        help="Regexp of directories to skip (can be specified multiple times)",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to YAML/JSON configuration file",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of parallel workers (default: 4)",
    )
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    checker: Dict[str, Any] = {}
    files: Dict[str, Any] = {}
    reporting: Dict[str, Any] = {}
    if args.min_complexity is not None:
        checker["min_complexity"] = args.min_complexity
    if args.skip_nil_guards:
        checker["skip_nil_guards"] = True
    if args.exclude_dirs:
        files["exclude_dirs"] = args.exclude_dirs
    if args.jobs is not None:
        files["workers"] = args.jobs
    if args.out_json:
        reporting["format"] = "json"
    if args.top is not None:
        reporting["top"] = args.top
    return {"checker": checker, "files": files, "reporting": reporting}


def run(
    args: argparse.Namespace,
    stdout: IO[str],
    stderr: IO[str],
) -> int:
    logger = configure_logging(verbose=args.verbose, stream=stderr)
    try:
        config = Config.load(args.config) if args.config else Config.discover()
        config = config.with_overrides(_overrides(args))
        engine = CheckEngine(config, logger=logger)
    except (ConfigError, FileNotFoundError) as exc:
        print(exc, file=stderr)
        return 1

    report = engine.run(args.targets)
    for error in report.errors:
        print(error, file=stdout)

    issues = sort_issues(report.issues)
    if config.output_format() == "json":
        stdout.write(format_json(issues))
    else:
        stdout.write(format_text(issues, config.top()))
    return 0


def main(
    argv: Optional[List[str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if stdout is None:
        stdout = sys.stdout
    if stderr is None:
        stderr = sys.stderr
    try:
        return run(args, stdout, stderr)
    except KeyboardInterrupt:
        print("\nCheck interrupted.", file=stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
