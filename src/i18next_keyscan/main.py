"""
Command-line interface for extracting i18next translation keys.

The input files are JSON syntax trees as produced by ``@babel/parser`` (with
the ``jsx`` plugin and ``tokens: false``), one per source file. The output is
the collected keys as ``{locale: {namespace: {key: default_value}}}``.

Usage Examples:
    Extract keys from two files:
        i18next-keyscan build/ast/App.jsx.ast.json build/ast/Home.jsx.ast.json

    Use a configuration file and write the result to disk:
        i18next-keyscan build/ast/*.ast.json --config keyscan.yaml --output keys.json

    Write a documented sample configuration:
        i18next-keyscan --init-config keyscan.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

from .config import ConfigManager, KeyScanConfig
from .orchestrator import KeyCollector, extract_program
from .syntax import load_program_file
from .utils.core.exceptions import KeyScanError
from .utils.core.version import get_project_version


class ScanArgs(NamedTuple):
    """Type-safe container for command-line arguments."""

    files: list[Path]
    config: Path | None
    locales: list[str]
    output: Path | None
    init_config: Path | None
    verbose: bool


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_arguments(argv: Sequence[str] | None = None) -> ScanArgs:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments in a type-safe container
    """
    parser = argparse.ArgumentParser(
        prog="i18next-keyscan",
        description="Extract i18next translation keys from JSON syntax trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s App.jsx.ast.json                  # Print the keys of one file
  %(prog)s *.ast.json --locale en --locale fr  # Derive keys for two locales
  %(prog)s *.ast.json --output keys.json     # Write the keys to a file
  %(prog)s --init-config keyscan.yaml        # Write a sample configuration
        """,
    )

    _ = parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Syntax tree JSON files to scan",
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: built-in defaults)",
    )

    _ = parser.add_argument(
        "--locale",
        action="append",
        default=[],
        help="Locale to derive keys for, overrides the configuration (can be used multiple times)",
    )

    _ = parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output JSON file path (default: standard output)",
    )

    _ = parser.add_argument(
        "--init-config",
        type=Path,
        default=None,
        help="Write a documented sample configuration to this path and exit",
    )

    _ = parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_project_version()}",
    )

    args = parser.parse_args(argv)

    # Convert to type-safe container - argparse returns Any types
    return ScanArgs(
        files=args.files or [],  # pyright: ignore[reportAny]
        config=args.config,  # pyright: ignore[reportAny]
        locales=args.locale or [],  # pyright: ignore[reportAny]
        output=args.output,  # pyright: ignore[reportAny]
        init_config=args.init_config,  # pyright: ignore[reportAny]
        verbose=args.verbose,  # pyright: ignore[reportAny]
    )


def load_configuration(args: ScanArgs) -> KeyScanConfig:
    """
    Build the configuration from the config file and command-line overrides.

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    if args.config is not None:
        config = ConfigManager.load_config(args.config)
    else:
        config = KeyScanConfig()

    if args.locales:
        config = ConfigManager.with_overrides(config, locales=args.locales)
    return config


def scan_files(files: Sequence[Path], config: KeyScanConfig) -> KeyCollector:
    """
    Run an extraction pass on every file and collect the keys.

    Raises:
        SyntaxTreeError: If a file is not a valid syntax tree
        FileNotFoundError: If a file does not exist
    """
    logger = logging.getLogger(__name__)
    collector = KeyCollector(config)

    for path in files:
        logger.debug(f"Scanning {path}")
        program = load_program_file(path)
        collector.add(extract_program(program, config))

    return collector


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the key extraction command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        if args.init_config is not None:
            ConfigManager.create_sample_config(args.init_config)
            logger.info(f"Sample configuration written to {args.init_config}")
            return 0

        if not args.files:
            logger.error("No syntax tree files given")
            return 1

        config = load_configuration(args)
        collector = scan_files(args.files, config)
        output = json.dumps(collector.as_dict(), indent=2, ensure_ascii=False)

        if args.output is not None:
            _ = args.output.parent.mkdir(parents=True, exist_ok=True)
            _ = args.output.write_text(output + "\n", encoding="utf-8")
            logger.info(f"Keys written to {args.output}")
        else:
            print(output)

        if collector.diagnostics:
            logger.warning(
                f"{len(collector.diagnostics)} usage site(s) could not be extracted"
            )
        return 0

    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except (KeyScanError, FileNotFoundError) as e:
        logger.error(f"Error during key extraction: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
