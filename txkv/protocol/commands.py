"""
Protocol Command and Reply Definitions

This module defines the data structures for protocol commands and replies.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class CommandType(Enum):
    """Enumeration of supported command types."""
    GET = auto()
    SET = auto()
    DEL = auto()
    INCR = auto()
    DELVALUE = auto()
    MULTI = auto()
    EXEC = auto()
    DISCARD = auto()
    INVALID = auto()


# Commands that read or mutate the store
DATA_COMMANDS = frozenset({
    CommandType.GET,
    CommandType.SET,
    CommandType.DEL,
    CommandType.INCR,
    CommandType.DELVALUE,
})

# Commands consumed by the transaction coordinator
CONTROL_COMMANDS = frozenset({
    CommandType.MULTI,
    CommandType.EXEC,
    CommandType.DISCARD,
})


class ReplyType(Enum):
    """Enumeration of reply kinds."""
    INT = auto()
    NIL = auto()
    COUNT = auto()
    ERROR = auto()
    ACK = auto()


class ErrorKind(Enum):
    """Recoverable error conditions, rendered as reply text."""
    MALFORMED_COMMAND = "ERROR"
    NOT_IN_TRANSACTION = "NOT IN TRANSACTION"
    ALREADY_IN_TRANSACTION = "ALREADY IN TRANSACTION"


@dataclass(frozen=True)
class Command:
    """
    Represents a parsed protocol command.

    Attributes:
        type: The command verb, or INVALID for malformed input
        key: The key for GET, SET, DEL and INCR (empty otherwise)
        value: The integer operand for SET and DELVALUE
        reason: Why the line was rejected (INVALID only)
        raw: The original raw command string
    """
    type: CommandType
    key: str = ""
    value: Optional[int] = None
    reason: str = ""
    raw: str = ""

    @property
    def is_valid(self) -> bool:
        return self.type != CommandType.INVALID

    @property
    def is_control(self) -> bool:
        return self.type in CONTROL_COMMANDS

    @classmethod
    def invalid(cls, reason: str, raw: str = "") -> "Command":
        """Create a command standing in for a malformed line."""
        return cls(type=CommandType.INVALID, reason=reason, raw=raw)


@dataclass(frozen=True)
class Reply:
    """
    Represents the result of processing one command.

    Attributes:
        type: Kind of reply
        value: Integer payload for INT and COUNT replies
        error: Error kind for ERROR replies
        message: Error detail, or acknowledgement text for ACK replies
        replies: Individual replies of an executed transaction
    """
    type: ReplyType
    value: Optional[int] = None
    error: Optional[ErrorKind] = None
    message: str = ""
    replies: Tuple["Reply", ...] = ()

    @classmethod
    def integer(cls, value: int) -> "Reply":
        """Create a reply holding a stored value."""
        return cls(type=ReplyType.INT, value=value)

    @classmethod
    def nil(cls) -> "Reply":
        """Create a reply for an absent key."""
        return cls(type=ReplyType.NIL)

    @classmethod
    def count(cls, n: int, replies: Tuple["Reply", ...] = ()) -> "Reply":
        """Create a count reply, optionally carrying batch results."""
        return cls(type=ReplyType.COUNT, value=n, replies=tuple(replies))

    @classmethod
    def ack(cls, message: str = "") -> "Reply":
        """Create an acknowledgement for a command with no result."""
        return cls(type=ReplyType.ACK, message=message)

    @classmethod
    def error(cls, kind: ErrorKind, message: str = "") -> "Reply":
        """Create an error reply."""
        return cls(type=ReplyType.ERROR, error=kind, message=message)

    @classmethod
    def malformed(cls, reason: str) -> "Reply":
        return cls.error(ErrorKind.MALFORMED_COMMAND, reason)

    @classmethod
    def not_in_transaction(cls) -> "Reply":
        return cls.error(ErrorKind.NOT_IN_TRANSACTION)

    @classmethod
    def already_in_transaction(cls) -> "Reply":
        return cls.error(ErrorKind.ALREADY_IN_TRANSACTION)

    @property
    def is_error(self) -> bool:
        return self.type == ReplyType.ERROR
