"""Exceptions raised by TxKV internals.

Malformed input and transaction misuse are reported to the caller as
error replies, not exceptions. The classes here signal programming
errors between components.
"""


class TxKVError(Exception):
    """Base class for TxKV exceptions."""


class UnsupportedCommandError(TxKVError):
    """A command was handed to a component that cannot apply it."""

    def __init__(self, command_type):
        self.command_type = command_type
        super().__init__(f"cannot execute {command_type.name} command directly")
