"""Protocol module for TxKV."""

from .commands import Command, CommandType, ErrorKind, Reply, ReplyType
from .parser import ProtocolParser

__all__ = [
    "Command",
    "CommandType",
    "ErrorKind",
    "Reply",
    "ReplyType",
    "ProtocolParser",
]
