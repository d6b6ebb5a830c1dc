"""Convert DocFX ManagedReference YAML to Docusaurus compatible Markdown.

Reads every ``*.yml`` file of the configured input directory and writes a
namespace page per namespace, a page per type and an API index page.
"""

import argparse
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from docfx_markdown.errors import DocGenError
from docfx_markdown.load_config import load_generator_config
from docfx_markdown.run_generation import run_generation

logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = "DFMG_DEBUG"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Command line of the generator."""
    ap = argparse.ArgumentParser(
        description="Convert DocFX ManagedReference YAML to Docusaurus Markdown.",
    )
    ap.add_argument(
        "--config",
        help="Path to the YAML config file (default: $DFMG_CONFIG or ./config.yaml)",
    )
    ap.add_argument(
        "--input",
        type=Path,
        help="Directory containing DocFX *.yml files (overrides inputPath)",
    )
    ap.add_argument(
        "--output",
        type=Path,
        help="Output directory, wiped before writing (overrides outputPath)",
    )
    ap.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for reading and rendering (default: Python's choice)",
    )
    ap.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging (same as DFMG_DEBUG=1)",
    )
    return ap


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides = {}
    if args.input is not None:
        overrides["inputPath"] = str(args.input)
    if args.output is not None:
        overrides["outputPath"] = str(args.output)
    return overrides


def main(argv: Sequence[str] | None = None) -> int:
    """Run the conversion process."""
    args = build_parser().parse_args(argv)

    debug = args.verbose or os.environ.get(DEBUG_ENV_VAR) == "1"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT
    )

    if args.workers is not None and args.workers < 1:
        logger.error("--workers must be at least 1")
        return 1

    try:
        config = load_generator_config(args.config, overrides=_cli_overrides(args))
        run_generation(config, workers=args.workers)
    except (DocGenError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
