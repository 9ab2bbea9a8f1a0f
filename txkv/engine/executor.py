"""
Command Executor Module

Applies data commands (GET, SET, DEL, INCR, DELVALUE) to a KVStore and
produces Reply objects. Transaction control commands never reach the
executor; they are consumed by the TransactionCoordinator.
"""

import logging
from typing import Iterable, List

from ..cache.store import KVStore
from ..errors import UnsupportedCommandError
from ..protocol.commands import Command, CommandType, DATA_COMMANDS, Reply

logger = logging.getLogger(__name__)


class CommandExecutor:
    """
    Executes data commands against a single store.

    Usage:
        executor = CommandExecutor(KVStore())
        executor.apply(parser.parse_request("SET a 5"))   # -> Reply.ack()
        executor.apply(parser.parse_request("GET a"))     # -> Reply.integer(5)

    Attributes:
        store: The KVStore commands are applied to
    """

    def __init__(self, store: KVStore):
        self.store = store

    def apply(self, command: Command) -> Reply:
        """
        Apply one data command to the store.

        Args:
            command: A valid GET, SET, DEL, INCR or DELVALUE command

        Returns:
            GET      -> integer reply, or nil if the key is absent
            SET/DEL  -> empty acknowledgement
            INCR     -> integer reply with the new value
            DELVALUE -> count of keys removed

        Raises:
            UnsupportedCommandError: For control or invalid commands
        """
        if command.type not in DATA_COMMANDS:
            raise UnsupportedCommandError(command.type)

        if command.type == CommandType.GET:
            value = self.store.get(command.key)
            return Reply.nil() if value is None else Reply.integer(value)

        if command.type == CommandType.SET:
            self.store.set(command.key, command.value)
            return Reply.ack()

        if command.type == CommandType.DEL:
            self.store.delete(command.key)
            return Reply.ack()

        if command.type == CommandType.INCR:
            return Reply.integer(self.store.increment(command.key))

        removed = self.store.delete_by_value(command.value)
        return Reply.count(removed)

    def apply_batch(self, commands: Iterable[Command]) -> List[Reply]:
        """
        Apply commands in order against the same store.

        The whole batch runs without yielding control, so no other command
        can interleave between its first and last element.

        Returns:
            One reply per command, in the same order
        """
        commands = list(commands)
        for command in commands:
            if command.type not in DATA_COMMANDS:
                raise UnsupportedCommandError(command.type)

        replies = [self.apply(command) for command in commands]
        logger.debug(f"Applied batch of {len(replies)} commands")
        return replies
