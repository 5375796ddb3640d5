# File: extmodel/cli.py
"""
extmodel - Command-Line Interface
==================================

Renders a model document (JSON/YAML) as an Ext JS / Sencha Touch model
class, built with the standard-library ``argparse`` module.

Usage examples::

    # Print an Ext JS 4 model to stdout
    python -m extmodel --model user.yaml

    # Sencha Touch 2, pretty-printed, written to a file
    python -m extmodel -m user.yaml -f touch2 --debug -o app/model/User.js

Exit codes:
    0 - success
    1 - configuration error (model cannot be rendered)
    3 - output error
    4 - input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, NoReturn, Optional, Sequence

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_CONFIGURATION_ERROR: int = 1
EXIT_OUTPUT_ERROR: int = 3
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the extmodel logger.

    Args:
        verbosity: -1 = ERROR, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity >= 0:
        level = logging.WARNING
    else:
        level = logging.ERROR

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    formatter: logging.Formatter = logging.Formatter(fmt, datefmt="%H:%M:%S")
    handler.setFormatter(formatter)

    root_logger: logging.Logger = logging.getLogger("extmodel")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from extmodel import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="extmodel",
        description=(
            "Render a server-side model description as an Ext JS / "
            "Sencha Touch data model class."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -m user.yaml\n"
            "  %(prog)s -m user.yaml -f extjs5 --debug -o User.js\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"extmodel v{__version__}",
    )

    parser.add_argument(
        "-m", "--model",
        type=str,
        required=True,
        metavar="PATH",
        help="Path to the model document (JSON or YAML).",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="FILE",
        help="Write the script to FILE instead of stdout.",
    )

    config_group = parser.add_argument_group("configuration overrides")
    config_group.add_argument(
        "-f", "--format",
        type=str,
        default=None,
        choices=["extjs4", "touch2", "extjs5"],
        help="Override the output format.",
    )
    config_group.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Pretty-print the generated script.",
    )
    config_group.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="Indentation width used with --debug.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except errors.",
    )

    return parser


# ---------------------------------------------------------------------------
# Config override builder
# ---------------------------------------------------------------------------


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, object]:
    """Build a config override dictionary from CLI arguments."""
    overrides: Dict[str, object] = {}

    if args.format is not None:
        overrides["output_format"] = args.format
    if args.debug is not None:
        overrides["debug"] = args.debug
    if args.indent is not None:
        overrides["indent_size"] = args.indent

    return overrides


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _run_render(model_path: Path, args: argparse.Namespace) -> int:
    """Load, render and emit one model. Returns the exit code."""
    from pydantic import ValidationError

    from extmodel.exceptions import ExtModelError
    from extmodel.loader import load_model_file, parse_raw_model
    from extmodel.translator import ModelTranslator
    from extmodel.utils import Timer, count_lines, write_file

    try:
        raw_data = load_model_file(model_path)
        model, config = parse_raw_model(raw_data)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Failed to load model: %s", exc)
        return EXIT_INPUT_ERROR

    overrides = _build_config_overrides(args)
    if overrides:
        try:
            for key, value in overrides.items():
                setattr(config, key, value)
        except ValidationError as exc:
            logger.error("Invalid configuration override: %s", exc)
            return EXIT_INPUT_ERROR

    with Timer("render") as t:
        try:
            content: str = ModelTranslator(config).render(model)
        except ExtModelError as exc:
            logger.error("Cannot render model '%s': %s", model.name, exc)
            return EXIT_CONFIGURATION_ERROR

    logger.info(
        "Rendered '%s' for %s: %d lines in %.3fs.",
        model.name or model_path.name,
        config.output_format,
        count_lines(content),
        t.elapsed,
    )

    if args.output is None:
        sys.stdout.write(content + "\n")
        return EXIT_SUCCESS

    output_path: Path = Path(args.output).resolve()
    try:
        write_file(output_path, content + "\n")
    except OSError as exc:
        logger.error("Failed to write %s: %s", output_path, exc)
        return EXIT_OUTPUT_ERROR

    logger.info("Wrote %s", output_path)
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    verbosity: int = -1 if args.quiet else args.verbose

    _setup_logging(verbosity)

    model_path: Path = Path(args.model).resolve()
    if not model_path.is_file():
        logger.error("Model file not found: %s", model_path)
        sys.exit(EXIT_INPUT_ERROR)

    logger.info("Model:   %s", model_path)
    logger.info("Output:  %s", args.output or "<stdout>")

    sys.exit(_run_render(model_path, args))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_CONFIGURATION_ERROR",
    "EXIT_OUTPUT_ERROR",
    "EXIT_INPUT_ERROR",
]
