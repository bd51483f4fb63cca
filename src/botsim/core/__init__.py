"""
Core engine primitives.

This layer knows NOTHING about analysis or plotting.
It only knows:
- Instructions (chip deliveries and routing rules)
- Units holding chips, pending rules, output sinks
- Firing units and propagating their chips to quiescence
- Which unit first compared the watched pair
"""

from botsim.core.instructions import Target, ValueToUnit, UnitRoutes, Instruction
from botsim.core.errors import (
    BotNetworkError,
    MalformedStateError,
    InstructionParseError,
    UnresolvedQueryError,
)
from botsim.core.parser import parse_instructions, parse_line
from botsim.core.factory import Factory, FactoryConfig, Firing, RunResult, normalize_pair

__all__ = [
    "Target",
    "ValueToUnit",
    "UnitRoutes",
    "Instruction",
    "BotNetworkError",
    "MalformedStateError",
    "InstructionParseError",
    "UnresolvedQueryError",
    "parse_instructions",
    "parse_line",
    "Factory",
    "FactoryConfig",
    "Firing",
    "RunResult",
    "normalize_pair",
]
