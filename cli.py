#!/usr/bin/env python3
"""
FPL Scan CLI

A tool for finding fuzzy-logic program definitions whose generated sources
are missing or out of date, and optionally handing them to the generator.
"""

import argparse
import logging
import shlex
import sys
from pathlib import Path

from exporters import to_ascii, to_json
from generator import GenerationError, generate_all
from scanner import (
    ConfigurationError,
    ScanConfiguration,
    ScanError,
    Scanner,
    load_configuration,
)
from scanner.patterns import DEFAULT_INCLUDES


logger = logging.getLogger("fplscan")

DEFAULT_SOURCE_DIR = "src/main/fpl"

UP_TO_DATE_MESSAGE = "All artifacts are up to date."


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="fplscan",
        description="Find definition files whose generated artifacts are missing or stale.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fplscan                                  # List every definition under src/main/fpl
  fplscan defs -d build/generated          # Only definitions with stale output
  fplscan defs -d out --stale-millis 2000  # Allow two seconds of clock skew
  fplscan defs -d out -f json -o stale.json
  fplscan defs -d out --generate "fuzzer"  # Regenerate stale definitions
  fplscan --config fplscan.yaml            # Settings from a YAML or TOML file
        """,
    )

    # Positional arguments
    parser.add_argument(
        "source_dir",
        nargs="?",
        default=None,
        help=f"Directory containing definition files (default: {DEFAULT_SOURCE_DIR})",
    )

    # Scanning options
    parser.add_argument(
        "-d", "--output-dir",
        type=str,
        default=None,
        help="Directory of generated artifacts; enables staleness checks",
    )

    parser.add_argument(
        "--include",
        nargs="+",
        default=None,
        help=f"Glob patterns of files to scan (default: {' '.join(DEFAULT_INCLUDES)})",
    )

    parser.add_argument(
        "--exclude",
        nargs="+",
        default=None,
        help="Glob patterns of files to skip",
    )

    parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help="Do not skip VCS metadata and editor backup files",
    )

    parser.add_argument(
        "--stale-millis",
        type=int,
        default=None,
        help="Tolerance in milliseconds when comparing modification times (default: 0)",
    )

    parser.add_argument(
        "--package",
        type=str,
        default=None,
        help="Namespace to use instead of the one declared in each file",
    )

    parser.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Skip symbolic links while scanning",
    )

    parser.add_argument(
        "--extension",
        type=str,
        default=None,
        help="Extension of generated artifacts (default: java)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML or TOML file with scan settings; command line options take precedence",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["ascii", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    # Generation
    parser.add_argument(
        "--generate",
        type=str,
        default=None,
        metavar="CMD",
        help="Generator command to run for each stale definition",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output",
    )

    return parser.parse_args(args)


def build_configuration(parsed) -> ScanConfiguration:
    """Assemble the scan configuration from a config file and command line options."""
    overrides = {
        "base_directory": Path(parsed.source_dir).resolve() if parsed.source_dir else None,
        "output_directory": Path(parsed.output_dir).resolve() if parsed.output_dir else None,
        "includes": parsed.include,
        "excludes": parsed.exclude,
        "stale_millis": parsed.stale_millis,
        "namespace_override": parsed.package,
        "output_extension": parsed.extension,
        "use_default_excludes": False if parsed.no_default_excludes else None,
        "follow_symlinks": False if parsed.no_follow_symlinks else None,
    }

    if parsed.config:
        return load_configuration(Path(parsed.config), **overrides)

    if overrides["base_directory"] is None:
        overrides["base_directory"] = Path(DEFAULT_SOURCE_DIR).resolve()
    return ScanConfiguration(**{key: value for key, value in overrides.items() if value is not None})


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    _configure_logging(parsed.verbose)

    try:
        config = build_configuration(parsed)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not config.base_directory.is_dir():
        logger.info("Skipping non-existing source directory: %s", config.base_directory)
        return 0

    # Scan for stale definitions
    logger.debug("Scanning for definitions: %s", config.base_directory)
    try:
        stale = Scanner(config).scan()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ScanError as e:
        print(f"Error scanning definitions: {e}", file=sys.stderr)
        return 1
    logger.debug("Found definitions: %s", [str(unit) for unit in stale])

    if parsed.generate:
        if not stale:
            logger.info(UP_TO_DATE_MESSAGE)
            return 0
        try:
            count = generate_all(
                shlex.split(parsed.generate),
                stale,
                output_directory=config.output_directory,
                namespace_override=config.namespace_override,
            )
        except GenerationError as e:
            print(f"Error generating {e.unit.input_file}: {e}", file=sys.stderr)
            return 1
        logger.info("Processed %d program%s", count, "s" if count != 1 else "")
        return 0

    # Generate report
    if parsed.format == "json":
        output = to_json(stale, config.base_directory, config.output_directory)
    else:  # ascii (default)
        output = to_ascii(stale, style=parsed.ascii_style)
        if not stale:
            output = UP_TO_DATE_MESSAGE

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
