"""
Protocol Parser Module

This module handles parsing of raw protocol lines into Command objects
and formatting of Reply objects back into protocol text.
"""

import re
from typing import List, Optional

from .commands import Command, CommandType, ErrorKind, Reply, ReplyType
from ..config.settings import settings

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")

NIL = "<nil>"


class ProtocolParser:
    """
    Parser for the TxKV text protocol.

    Protocol Format:
        Request:  <VERB> [ARGS...]\n
        Reply:    one line per reply (empty acknowledgements print nothing)

    Commands:
        GET <key>              -> <value> | <nil>
        SET <key> <integer>    -> (empty)
        DEL <key>              -> (empty)
        INCR <key>             -> <new value>
        DELVALUE <integer>     -> <number of keys removed>
        MULTI                  -> OK | ALREADY IN TRANSACTION
        EXEC                   -> <number of commands run> | NOT IN TRANSACTION
        DISCARD                -> <number of commands dropped> | NOT IN TRANSACTION

    While a transaction is open, data commands reply QUEUED.

    Constraints:
        - Verbs are case-sensitive
        - Keys: any non-whitespace token of at most settings.MAX_KEY_LENGTH
          (256) characters; longer keys are rejected as malformed
        - Integers: decimal, within the signed range of settings.INT_BITS
    """

    def __init__(self, bits: int = None, max_key_length: int = None):
        """
        Initialize the parser with constraints from settings.

        Args:
            bits: Integer width for operands (default settings.INT_BITS)
            max_key_length: Longest accepted key (default settings.MAX_KEY_LENGTH)

        Raises:
            ValueError: If bits is not positive
        """
        bits = bits if bits is not None else settings.INT_BITS
        if bits <= 0:
            raise ValueError("bits must be positive")

        self.min_value = -(1 << (bits - 1))
        self.max_value = (1 << (bits - 1)) - 1
        self.max_key_length = (
            max_key_length if max_key_length is not None else settings.MAX_KEY_LENGTH
        )

        self._handlers = {
            "GET": self._parse_key_command,
            "DEL": self._parse_key_command,
            "INCR": self._parse_key_command,
            "SET": self._parse_set,
            "DELVALUE": self._parse_delvalue,
            "MULTI": self._parse_control,
            "EXEC": self._parse_control,
            "DISCARD": self._parse_control,
        }

    def parse_request(self, data: str) -> Command:
        """
        Parse a raw request line into a Command object.

        Args:
            data: Raw request string (may include trailing newline)

        Returns:
            Command object representing the parsed request.
            Returns an INVALID command carrying a reason for malformed
            input; this method never raises on user input.

        Examples:
            >>> parser = ProtocolParser()
            >>> cmd = parser.parse_request("SET a 5")
            >>> cmd.type == CommandType.SET
            True
            >>> cmd.key, cmd.value
            ('a', 5)
            >>> parser.parse_request("set a 5").reason
            "unknown command 'set'"
        """
        raw = data.strip()
        if not raw:
            return Command.invalid("empty command", raw=raw)

        parts = raw.split()
        verb = parts[0]

        handler = self._handlers.get(verb)
        if handler is None:
            return Command.invalid(f"unknown command '{verb}'", raw=raw)

        return handler(CommandType[verb], parts, raw)

    def _arity_error(self, verb: str, expected: int, raw: str) -> Command:
        noun = "argument" if expected == 1 else "arguments"
        return Command.invalid(f"{verb} expects {expected} {noun}", raw=raw)

    def _check_key(self, key: str) -> Optional[str]:
        if len(key) > self.max_key_length:
            return f"key longer than {self.max_key_length} characters"
        return None

    def _parse_integer(self, token: str) -> Optional[int]:
        """Parse a decimal operand; None if malformed or out of range."""
        if not _INTEGER_RE.match(token):
            return None
        value = int(token)
        if value < self.min_value or value > self.max_value:
            return None
        return value

    def _integer_error(self, token: str, raw: str) -> Command:
        if _INTEGER_RE.match(token):
            return Command.invalid(f"integer out of range '{token}'", raw=raw)
        return Command.invalid(f"value is not an integer '{token}'", raw=raw)

    def _parse_key_command(self, command_type: CommandType, parts: List[str], raw: str) -> Command:
        """
        Parse GET, DEL and INCR.

        Format: <VERB> <key>
        """
        if len(parts) != 2:
            return self._arity_error(parts[0], 1, raw)

        key = parts[1]
        problem = self._check_key(key)
        if problem:
            return Command.invalid(problem, raw=raw)

        return Command(type=command_type, key=key, raw=raw)

    def _parse_set(self, command_type: CommandType, parts: List[str], raw: str) -> Command:
        """
        Parse a SET command.

        Format: SET <key> <integer>
        """
        if len(parts) != 3:
            return self._arity_error(parts[0], 2, raw)

        key = parts[1]
        problem = self._check_key(key)
        if problem:
            return Command.invalid(problem, raw=raw)

        value = self._parse_integer(parts[2])
        if value is None:
            return self._integer_error(parts[2], raw)

        return Command(type=command_type, key=key, value=value, raw=raw)

    def _parse_delvalue(self, command_type: CommandType, parts: List[str], raw: str) -> Command:
        """
        Parse a DELVALUE command.

        Format: DELVALUE <integer>
        """
        if len(parts) != 2:
            return self._arity_error(parts[0], 1, raw)

        value = self._parse_integer(parts[1])
        if value is None:
            return self._integer_error(parts[1], raw)

        return Command(type=command_type, value=value, raw=raw)

    def _parse_control(self, command_type: CommandType, parts: List[str], raw: str) -> Command:
        """Parse MULTI, EXEC and DISCARD, which take no operands."""
        if len(parts) != 1:
            return self._arity_error(parts[0], 0, raw)
        return Command(type=command_type, raw=raw)

    def format_reply(self, reply: Reply, verbose: bool = False) -> str:
        """
        Format a Reply object into protocol text.

        Args:
            reply: Reply object to format
            verbose: For EXEC, also render each batch reply on its own
                numbered line

        Returns:
            Rendered text WITHOUT trailing newline. Empty acknowledgements
            render as an empty string.

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_reply(Reply.integer(5))
            '5'
            >>> parser.format_reply(Reply.nil())
            '<nil>'
            >>> parser.format_reply(Reply.not_in_transaction())
            'NOT IN TRANSACTION'
        """
        if reply.type == ReplyType.INT:
            return str(reply.value)

        if reply.type == ReplyType.NIL:
            return NIL

        if reply.type == ReplyType.COUNT:
            if not (verbose and reply.replies):
                return str(reply.value)
            lines = [str(reply.value)]
            for index, item in enumerate(reply.replies, start=1):
                lines.append(f"{index}) {self.format_reply(item) or 'OK'}")
            return "\n".join(lines)

        if reply.type == ReplyType.ERROR:
            if reply.error == ErrorKind.MALFORMED_COMMAND:
                return f"{reply.error.value} {reply.message}".rstrip()
            return reply.error.value

        return reply.message
