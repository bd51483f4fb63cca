"""
Parser for the textual instruction list.

    value 5 goes to bot 2
    bot 2 gives low to bot 1 and high to output 0
"""

from __future__ import annotations
import re
from typing import Iterable

from botsim.core.errors import InstructionParseError
from botsim.core.instructions import Instruction, Target, UnitRoutes, ValueToUnit


VALUE_RE = re.compile(r"^value (?P<value>\d+) goes to bot (?P<unit>\d+)$")
ROUTE_RE = re.compile(
    r"^bot (?P<unit>\d+) gives "
    r"low to (?P<low_kind>bot|output) (?P<low_id>\d+) and "
    r"high to (?P<high_kind>bot|output) (?P<high_id>\d+)$"
)


def _target(kind: str, target_id: str) -> Target:
    if kind == "bot":
        return Target.unit(int(target_id))
    return Target.sink(int(target_id))


def parse_line(line: str, line_number: int = 1) -> Instruction:
    """Parse a single instruction line."""
    text = line.strip()

    match = VALUE_RE.match(text)
    if match:
        return ValueToUnit(unit=int(match["unit"]), value=int(match["value"]))

    match = ROUTE_RE.match(text)
    if match:
        return UnitRoutes(
            unit=int(match["unit"]),
            low=_target(match["low_kind"], match["low_id"]),
            high=_target(match["high_kind"], match["high_id"]),
        )

    raise InstructionParseError(line_number, line)


def parse_instructions(text: str | Iterable[str]) -> list[Instruction]:
    """
    Parse instruction text into an ordered instruction list.

    Args:
        text: Whole input as one string, or an iterable of lines

    Returns:
        Instructions in input order. Blank lines are skipped.

    Raises:
        InstructionParseError: On the first line that is not an instruction
    """
    lines = text.splitlines() if isinstance(text, str) else text

    instructions = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        instructions.append(parse_line(line, line_number))
    return instructions
