from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .batch import process_batch
from .report import build_summary, render_report
from .settings import MinifySettings


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="webmin",
        description="Batch minifier for JavaScript, CSS and HTML files",
    )

    p.add_argument("-i", "--input", required=True, help="Input file or directory")
    p.add_argument("-o", "--output", required=True, help="Output directory")

    # Logging
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    return p


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    input_path = Path(args.input).resolve()
    settings = MinifySettings(output_dir=Path(args.output).resolve())

    try:
        results, stats = process_batch(input_path, settings)
    except FileNotFoundError as e:
        logger.error("Cannot read input path %s: %s", input_path, e.strerror or e)
        return 1

    # Print summary
    summary = build_summary(results, stats)
    print()
    print(render_report(summary))
    return 0
