"""
Queries over finished factory runs.

IMPORTANT: queries never mutate a factory. A query that needs its own
watched pair builds a fresh factory for it.
"""

from __future__ import annotations
from typing import Iterable, Mapping, Sequence, Union

import numpy as np

from botsim.core.errors import UnresolvedQueryError
from botsim.core.factory import Factory, FactoryConfig, RunResult
from botsim.core.instructions import Instruction


SinkSource = Union[Factory, RunResult, Mapping[int, int]]


def find_unit_comparing(
    instructions: Iterable[Instruction],
    a: int,
    b: int,
) -> int | None:
    """
    Find the unit responsible for comparing chips `a` and `b`.

    Args:
        instructions: Full instruction list
        a, b: Chip values, in either order

    Returns:
        The first unit that compared exactly these two chips, or None
    """
    factory = Factory(FactoryConfig(watched_pair=(a, b), record_trace=False))
    return factory.run(instructions).observed_unit


def _sink_table(source: SinkSource) -> Mapping[int, int]:
    if isinstance(source, (Factory, RunResult)):
        return source.sinks
    return source


def output_product(source: SinkSource, sinks: Sequence[int] = (0, 1, 2)) -> int:
    """
    Multiply together the chips in the given output sinks.

    Args:
        source: Factory, RunResult or plain {sink: value} mapping
        sinks: Sink IDs to include

    Raises:
        UnresolvedQueryError: If any requested sink was never written
    """
    table = _sink_table(source)
    missing = [s for s in sinks if s not in table]
    if missing:
        raise UnresolvedQueryError(f"Outputs never written: {missing}")

    # object dtype keeps Python ints, so large products cannot overflow
    values = np.array([table[s] for s in sinks], dtype=object)
    return int(np.prod(values)) if len(values) else 1
