"""
Transaction Coordinator Module

Gatekeeper between the parser and the executor. Owns the transaction
state and the queue of buffered commands.

State machine:

    Idle   + data command -> execute now              -> Idle
    Idle   + MULTI        -> start buffering, OK      -> Active
    Idle   + EXEC/DISCARD -> NOT IN TRANSACTION       -> Idle
    Active + data command -> enqueue, QUEUED          -> Active
    Active + MULTI        -> ALREADY IN TRANSACTION   -> Active
    Active + EXEC         -> run queue as one batch   -> Idle
    Active + DISCARD      -> drop queue               -> Idle
    any    + invalid      -> error reply              -> unchanged

Buffered commands never touch the store before EXEC, and never at all
after DISCARD.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Tuple

from .executor import CommandExecutor
from ..config.settings import settings
from ..protocol.commands import Command, CommandType, Reply

logger = logging.getLogger(__name__)


class TransactionState(Enum):
    """Transaction state owned by the coordinator."""
    IDLE = "idle"
    ACTIVE = "active"


class TransactionCoordinator:
    """
    Routes each command either to the executor or into the pending queue.

    Usage:
        coordinator = TransactionCoordinator(CommandExecutor(KVStore()))
        coordinator.dispatch(parser.parse_request("MULTI"))     # OK
        coordinator.dispatch(parser.parse_request("SET a 1"))   # QUEUED
        coordinator.dispatch(parser.parse_request("EXEC"))      # count 1

    Attributes:
        executor: Executor that applies data commands
        state: Current TransactionState
    """

    def __init__(self, executor: CommandExecutor):
        self.executor = executor
        self.state = TransactionState.IDLE
        self._queue: List[Command] = []

        self._commands_processed = 0
        self._transactions_executed = 0
        self._transactions_discarded = 0

    @property
    def in_transaction(self) -> bool:
        return self.state == TransactionState.ACTIVE

    @property
    def pending(self) -> Tuple[Command, ...]:
        """Commands buffered in the open transaction, in execution order."""
        return tuple(self._queue)

    def dispatch(self, command: Command) -> Reply:
        """
        Process one parsed command.

        Args:
            command: Any command produced by the parser

        Returns:
            The reply to send back for this command
        """
        self._commands_processed += 1

        if not command.is_valid:
            logger.debug(f"Rejected malformed command {command.raw!r}: {command.reason}")
            return Reply.malformed(command.reason)

        if command.type == CommandType.MULTI:
            return self._begin()

        if command.type == CommandType.EXEC:
            return self._execute()

        if command.type == CommandType.DISCARD:
            return self._discard()

        if self.in_transaction:
            self._queue.append(command)
            logger.debug(f"Queued {command.type.name} ({len(self._queue)} pending)")
            return Reply.ack(settings.QUEUED_MESSAGE)

        return self.executor.apply(command)

    def _begin(self) -> Reply:
        if self.in_transaction:
            return Reply.already_in_transaction()

        self.state = TransactionState.ACTIVE
        logger.debug("Transaction started")
        return Reply.ack(settings.MULTI_MESSAGE)

    def _execute(self) -> Reply:
        if not self.in_transaction:
            return Reply.not_in_transaction()

        queued = self._reset()
        replies = self.executor.apply_batch(queued)
        self._transactions_executed += 1
        logger.debug(f"Transaction executed {len(replies)} commands")
        return Reply.count(len(replies), replies)

    def _discard(self) -> Reply:
        if not self.in_transaction:
            return Reply.not_in_transaction()

        dropped = self._reset()
        self._transactions_discarded += 1
        logger.debug(f"Transaction discarded {len(dropped)} commands")
        return Reply.count(len(dropped))

    def _reset(self) -> List[Command]:
        """Return to IDLE, handing back whatever was queued."""
        queued, self._queue = self._queue, []
        self.state = TransactionState.IDLE
        return queued

    def get_stats(self) -> Dict[str, Any]:
        """
        Get coordinator statistics.

        Returns:
            Dictionary with state, pending count, commands processed and
            transactions executed/discarded.
        """
        return {
            "state": self.state.value,
            "pending": len(self._queue),
            "commands_processed": self._commands_processed,
            "transactions_executed": self._transactions_executed,
            "transactions_discarded": self._transactions_discarded,
        }
