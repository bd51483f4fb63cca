"""Exceptions raised by the bot network."""

from __future__ import annotations


class BotNetworkError(ValueError):
    """Base class for all bot network errors."""


class MalformedStateError(BotNetworkError):
    """
    The instruction set drove the network into a state it may never reach.

    Exactly one of `unit` or `sink` identifies the offending node.
    """

    def __init__(self, reason: str, unit: int | None = None, sink: int | None = None):
        self.reason = reason
        self.unit = unit
        self.sink = sink
        where = f"bot {unit}" if unit is not None else f"output {sink}"
        super().__init__(f"{where}: {reason}")


class InstructionParseError(BotNetworkError):
    """A line of instruction text matched no known instruction form."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"line {line_number}: cannot parse instruction {line!r}")


class UnresolvedQueryError(BotNetworkError, LookupError):
    """A query over a finished run has no answer (e.g. a sink never written)."""
