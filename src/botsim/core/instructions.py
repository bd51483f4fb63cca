"""
Instruction set consumed by the propagation engine.

Two instruction kinds exist:
- ValueToUnit: a chip of a given value is handed to a unit
- UnitRoutes: a unit's routing rule (where its low and high chips go)

Targets are tagged references into one of two disjoint address spaces:
units (bots) and sinks (output bins). The engine branches on the tag;
there are no polymorphic target objects.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Union


UNIT = "unit"
SINK = "sink"


@dataclass(frozen=True)
class Target:
    """A tagged reference to either a unit or a sink."""

    kind: Literal["unit", "sink"]
    id: int

    def __post_init__(self):
        if self.kind not in (UNIT, SINK):
            raise ValueError(f"Unknown target kind: {self.kind}")
        if self.id < 0:
            raise ValueError(f"Target id must be non-negative, got {self.id}")

    @classmethod
    def unit(cls, unit_id: int) -> Target:
        return cls(UNIT, unit_id)

    @classmethod
    def sink(cls, sink_id: int) -> Target:
        return cls(SINK, sink_id)

    @property
    def is_unit(self) -> bool:
        return self.kind == UNIT

    @property
    def is_sink(self) -> bool:
        return self.kind == SINK

    def __str__(self) -> str:
        return f"{'bot' if self.is_unit else 'output'} {self.id}"


@dataclass(frozen=True)
class ValueToUnit:
    """Deliver a chip of `value` to `unit`."""

    unit: int
    value: int


@dataclass(frozen=True)
class UnitRoutes:
    """
    Routing rule for `unit`.

    Once the unit holds two chips, the lower one goes to `low` and the
    higher one to `high`.
    """

    unit: int
    low: Target
    high: Target


Instruction = Union[ValueToUnit, UnitRoutes]
