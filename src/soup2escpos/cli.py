"""
Command-line entry point: ``soup2escpos [file_path]``.

Reads markup from the given file or from standard input and writes the raw
ESC/POS byte stream to standard output, ready to be piped to a printer
device (e.g. ``soup2escpos receipt.xml > /dev/usb/lp0``).

Exit status:
    0: success
    1: encoding error or unreadable input/config file
    2: invalid command-line usage
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from soup2escpos import __version__, get_logger, load_config
from soup2escpos.encoder import encode_to
from soup2escpos.exceptions import EncodeError
from soup2escpos.model.settings import EncoderSettings

logger = get_logger(__name__)

PROG = "soup2escpos"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=f"{PROG} v{__version__}: convert receipt markup into ESC/POS printer commands",
    )
    parser.add_argument(
        "file_path",
        nargs="?",
        help="path to file to process, otherwise will read from stdin",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON configuration file (default: ./soup2escpos.json if present)",
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    return parser


def _apply_log_level(level_name: str) -> None:
    # Environment variable wins over the configuration file.
    if "SOUP2ESCPOS_LOG_LEVEL" in os.environ:
        return
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        logging.getLogger(PROG).setLevel(level)
    else:
        logger.warning("Ignoring unknown log_level %r in configuration", level_name)


def _run(file_path: Optional[str], stdout: BinaryIO, settings: EncoderSettings) -> None:
    if file_path is None:
        encode_to(sys.stdin.buffer, stdout, settings)
        return
    with open(file_path, "rb") as source:
        encode_to(source, stdout, settings)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config is not None and not args.config.exists():
        parser.error(f"config file not found: {args.config}")

    config = load_config(args.config)
    _apply_log_level(config.get("log_level", "WARNING"))

    try:
        settings = EncoderSettings.from_config(config)
    except (TypeError, ValueError) as e:
        sys.stderr.write(f"{PROG}: error: invalid configuration: {e}\n")
        return 1

    stdout = sys.stdout.buffer
    try:
        _run(args.file_path, stdout, settings)
    except EncodeError as e:
        logger.debug("Encoding aborted", exc_info=True)
        sys.stderr.write(f"{PROG}: error: {e}\n")
        return 1
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        sys.stderr.write(f"{PROG}: error: {e}\n")
        return 1
    finally:
        stdout.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
