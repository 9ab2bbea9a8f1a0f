"""
Command Session Module

This module drives the command pipeline over a stream of input lines:
parse, route through the transaction coordinator, render the reply.

Two ways to drive a session:
- run(): pull lines from any iterable (e.g. sys.stdin) and yield
  rendered output lines until the input is exhausted
- handle_stream(): the same loop over an asyncio StreamReader/StreamWriter
  pair, with every dispatch serialized through an asyncio.Lock
"""

import asyncio
import logging
from asyncio import StreamReader, StreamWriter
from typing import Iterable, Iterator, Optional

from ..cache.store import KVStore
from ..config.settings import settings
from ..engine.executor import CommandExecutor
from ..engine.transaction import TransactionCoordinator
from ..protocol.commands import Reply
from ..protocol.parser import ProtocolParser

logger = logging.getLogger(__name__)


class Session:
    """
    One client's view of a store.

    Each session has its own transaction state. Sessions that share a
    store should also share a lock, so that one command or one EXEC
    batch is applied without interleaving with another session's
    commands.

    Usage:
        session = Session()
        for line in session.run(sys.stdin):
            print(line)

    Attributes:
        store: The KVStore this session operates on
        parser: The ProtocolParser for parsing lines and rendering replies
        coordinator: The TransactionCoordinator owning transaction state
        verbose: Render individual EXEC replies after the count
    """

    def __init__(
            self,
            store: KVStore = None,
            parser: ProtocolParser = None,
            lock: asyncio.Lock = None,
            verbose: bool = None,
    ):
        """
        Initialize the session.

        Args:
            store: KVStore instance (creates new one if not provided)
            parser: ProtocolParser instance (creates new one if not provided)
            lock: Lock shared with other sessions on the same store
            verbose: Default from settings.VERBOSE_EXEC

        Raises:
            ValueError: If the parser accepts a different integer range
                than the store holds
        """
        self.store = store if store is not None else KVStore()
        self.parser = parser if parser is not None else ProtocolParser(bits=self.store.bits)
        if (self.parser.min_value, self.parser.max_value) != (self.store.min_value, self.store.max_value):
            raise ValueError("parser and store integer widths differ")

        self.coordinator = TransactionCoordinator(CommandExecutor(self.store))
        self.verbose = verbose if verbose is not None else settings.VERBOSE_EXEC
        self._lock = lock
        self._lines_read = 0

    def process(self, line: str) -> Reply:
        """Parse one line and dispatch it through the coordinator."""
        command = self.parser.parse_request(line)
        return self.coordinator.dispatch(command)

    def handle_line(self, line: str) -> Optional[str]:
        """
        Handle one input line.

        Returns:
            Rendered reply text (may contain several lines for a verbose
            EXEC), or None when there is nothing to print: blank input
            lines and empty acknowledgements.
        """
        self._lines_read += 1
        if not line.strip():
            return None

        text = self.parser.format_reply(self.process(line), verbose=self.verbose)
        return text or None

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        """
        Process lines until the input is exhausted.

        End of input is a normal end of session. A transaction still open
        at that point is never applied to the store.

        Yields:
            Rendered reply text for every line that produces output
        """
        for line in lines:
            text = self.handle_line(line)
            if text is not None:
                yield text
        self._finish()

    async def handle_stream(self, reader: StreamReader, writer: StreamWriter) -> None:
        """
        Run the session over an asyncio stream pair.

        Reads lines until EOF, writing one rendered reply per line.
        Undecodable input produces an error reply and the session
        continues. The writer is always closed on exit.
        """
        try:
            while True:
                data = await reader.readline()
                if not data:
                    logger.debug("Input stream closed")
                    break

                try:
                    line = data.decode().rstrip("\r\n")
                except UnicodeDecodeError:
                    text = self.parser.format_reply(Reply.malformed("invalid encoding"))
                else:
                    if self._lock is None:
                        text = self.handle_line(line)
                    else:
                        async with self._lock:
                            text = self.handle_line(line)

                if text is not None:
                    writer.write(f"{text}\n".encode())
                    await writer.drain()

        except ConnectionResetError:
            logger.debug("Stream reset by peer")
        finally:
            self._finish()
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionResetError:
                pass

    def _finish(self) -> None:
        if self.coordinator.in_transaction:
            logger.info(
                f"Input ended inside a transaction; "
                f"{len(self.coordinator.pending)} queued commands not applied"
            )
        logger.info(f"Session finished after {self._lines_read} lines")

    def get_stats(self) -> dict:
        """
        Get session statistics.

        Returns:
            Dictionary with lines read, coordinator stats and store stats.
        """
        return {
            "lines_read": self._lines_read,
            "transactions": self.coordinator.get_stats(),
            "store_stats": self.store.get_stats(),
        }
