#!/usr/bin/env python3
"""
Batch HPHEX filter: blur then normalise every INPUT, writing OUTPUT.

    process INPUTFILE1 OUTPUTFILE1 [INPUTFILE2 OUTPUTFILE2 ...]
"""

import os
import sys
import logging
import argparse
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..exceptions import HphexError
from ..pipeline.blur_normalize import pair_arguments, process_batch

USAGE = "Usage: process INPUTFILE1 OUTPUTFILE1 [INPUTFILE2 OUTPUTFILE2 ...]"

logger = logging.getLogger(__name__)


class _Parser(argparse.ArgumentParser):
    """Reports usage problems to main() instead of exiting with status 2."""
    def error(self, message):
        raise ValueError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="process", usage=USAGE[len("Usage: "):],
                description="Blur and normalise HPHEX images.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="log at DEBUG level (options go before the paths)")
    # everything from the first path on is a path, dash-leading names included
    p.add_argument("paths", nargs=argparse.REMAINDER, metavar="PATH",
                   help="input/output file pairs")
    return p


def resolve_log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = os.getenv("HPHEX_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(verbose: bool = False) -> None:
    # --- Centralized Logging Configuration ---
    level = resolve_log_level(verbose)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def main(argv=None) -> int:
    try:
        args = build_parser().parse_args(argv)
        pairs = pair_arguments(args.paths)
    except ValueError:
        print(USAGE, file=sys.stderr)
        return 1

    configure_logging(args.verbose)

    try:
        process_batch(pairs)
    except (HphexError, OSError) as err:
        logger.error(f"Processing failed: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
