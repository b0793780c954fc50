"""Errors raised while reading, decoding or encoding RESP data."""

from __future__ import annotations


class RespError(Exception):
    """Base class of every RESP protocol error."""

    _template = "{}"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(self._template.format(detail))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RespError):
            return NotImplemented
        return type(self) is type(other) and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((type(self), self.detail))


class InvalidDataError(RespError):
    """The data is not valid RESP."""

    _template = "Invalid RESP data: {}"


class RespParseError(RespError):
    """The parser rejected the input."""

    _template = "Parse error: {}"


class IncompleteError(RespError):
    """More input is needed to finish a value."""

    _template = "Incomplete data"


class InvalidIntegerError(RespError):
    """An integer field could not be read."""

    _template = "Invalid integer: {}"


class InvalidBulkStringLengthError(RespError):
    """A bulk string announced an unusable length."""

    _template = "Invalid bulk string length: {}"


class InvalidArrayLengthError(RespError):
    """An array announced an unusable length."""

    _template = "Invalid array length: {}"


class UnsupportedTypeError(RespError):
    """The value has a type this protocol does not support."""

    _template = "Unsupported RESP type"


class UnknownCommandError(RespError):
    """The command name is not known."""

    _template = "Unknown command: {}"


class UnknownSubCommandError(RespError):
    """The sub-command name is not known."""

    _template = "Unknown subcommand: {}"


class RespSyntaxError(RespError):
    """The command is syntactically wrong."""

    _template = "Syntax error: {}"


class WrongNumberOfArgumentsError(RespError):
    """The command received the wrong number of arguments."""

    _template = "Wrong number of arguments: {}"


class UnknownRespError(RespError):
    """Any other failure."""

    _template = "Unknown error: {}"