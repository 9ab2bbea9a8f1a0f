#!/usr/bin/env python3
"""
TxKV Entry Point

Reads commands from stdin, one per line, and writes replies to stdout
until end of input.

Usage:
    python -m txkv.repl                   # Default settings
    python -m txkv.repl --debug           # Enable debug logging
    python -m txkv.repl --int-bits 32     # 32-bit wraparound for values
    python -m txkv.repl --verbose-exec    # Show each reply of an EXEC

Environment Variables:
    TXKV_INT_BITS        - Integer width for stored values
    TXKV_MAX_KEY_LENGTH  - Longest accepted key
    TXKV_VERBOSE_EXEC    - Render individual EXEC replies (true/false)
    TXKV_DEBUG           - Enable debug mode (true/false)
    TXKV_LOG_LEVEL       - Log level when not in debug mode
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .cache.store import KVStore
from .config.settings import settings
from .protocol.parser import ProtocolParser
from .session.stream_session import Session


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="TxKV: Embedded Transactional Key-Value Store",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--int-bits",
        type=int,
        default=settings.INT_BITS,
        help="Width of stored integers; INCR wraps around at this width",
    )

    parser.add_argument(
        "--verbose-exec",
        action="store_true",
        default=settings.VERBOSE_EXEC,
        help="Print each queued command's reply after the EXEC count",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    if args.int_bits <= 0:
        parser.error("--int-bits must be positive")
    return args


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> Session:
    """Run one session over the given text streams."""
    store = KVStore(bits=args.int_bits)
    session = Session(
        store=store,
        parser=ProtocolParser(bits=args.int_bits),
        verbose=args.verbose_exec,
    )

    for text in session.run(stdin):
        stdout.write(f"{text}\n")
        stdout.flush()

    return session


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    logger.debug(f"Starting TxKV session (int bits: {args.int_bits})")

    try:
        session = run(args, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        return 130

    logger.debug(f"Session stats: {session.get_stats()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
