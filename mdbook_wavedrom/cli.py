"""
Command line entry point for `mdbook-wavedrom`.

    mdbook-wavedrom                      run as an mdBook preprocessor (stdin -> stdout)
    mdbook-wavedrom supports <renderer>  exit 0 if the renderer is supported, 1 otherwise
    mdbook-wavedrom install [dir]        register the preprocessor in <dir>/book.toml
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from ._logging import configure_cli_logging
from .errors import WavedromError
from .installer import install
from .preprocess import run, supports_renderer

logger = logging.getLogger(__name__)


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdbook-wavedrom",
        description="mdbook preprocessor to add wavedrom support",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    supports = sub.add_parser(
        "supports", help="Check whether a renderer is supported by this preprocessor"
    )
    supports.add_argument("renderer")

    inst = sub.add_parser(
        "install", help="Install the required asset files and include it in the config"
    )
    inst.add_argument(
        "dir",
        nargs="?",
        default=".",
        help="Root directory for the book, should contain the configuration file (`book.toml`)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = make_parser().parse_args(argv)

    if args.command == "supports":
        # mdBook reads the answer from the exit status.
        return 0 if supports_renderer(args.renderer) else 1

    configure_cli_logging()
    try:
        if args.command == "install":
            install(args.dir, logger=logger)
        else:
            run(sys.stdin, sys.stdout, logger=logger)
    except WavedromError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
