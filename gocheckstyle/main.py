"""Command line entry point.

    gocheckstyle [--config FILE] [--reporter plain|xml|json] [--jobs N] [paths ...]

Exit status is 1 when any fatal problem is reported, or when the
configuration, a file read or a parse fails; otherwise 0.
"""

import argparse
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .checkstyle_logging import get_logger, setup_logging
from .config import DEFAULT_CONFIG, CheckstyleConfig, load_config, load_config_file
from .engine import Checker
from .errors import CheckstyleError, ConfigError
from .models import Problem
from .reporter import EXIT_FATAL, REPORTERS, create_reporter
from .walker import FileWalker

logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gocheckstyle",
        description="Check Go source files against configurable style rules.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to check (default: current directory).",
    )
    parser.add_argument(
        "--config",
        default="",
        help="Path to a JSON config file (default: built-in config).",
    )
    parser.add_argument(
        "--reporter",
        default="plain",
        choices=sorted(REPORTERS),
        help="Report output format (default: plain).",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of files to check in parallel (default: 1).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages.",
    )
    return parser


def read_config(path: str) -> CheckstyleConfig:
    if not path:
        return load_config(DEFAULT_CONFIG)
    return load_config_file(path)


def check_file(checker: Checker, file_name: str) -> list[Problem]:
    """Read and check one file.

    Raises:
        CheckstyleError: If the file cannot be read or parsed.
    """
    try:
        src = Path(file_name).read_bytes()
    except OSError as e:
        raise CheckstyleError(f"Read file {file_name} failed: {e}") from e
    return checker.check(file_name, src)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        config = read_config(args.config)
    except ConfigError as e:
        logger.error(f"Load config {args.config or '<default>'} failed: {e}")
        return EXIT_FATAL

    checker = Checker(config)
    reporter = create_reporter(args.reporter, checker)
    files = list(FileWalker(config.ignore).iter_files(args.paths))
    logger.debug(f"Checking {len(files)} file(s)")

    try:
        if args.jobs > 1:
            with ThreadPoolExecutor(max_workers=args.jobs) as executor:
                results = executor.map(lambda f: (f, check_file(checker, f)), files)
                for file_name, problems in results:
                    reporter.receive_problems(file_name, problems)
        else:
            for file_name in files:
                reporter.receive_problems(file_name, check_file(checker, file_name))
    except CheckstyleError as e:
        logger.error(str(e))
        return EXIT_FATAL

    return reporter.finalize()


if __name__ == "__main__":
    raise SystemExit(main())
