"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


EXAMPLE_TEXT = """\
value 5 goes to bot 2
bot 2 gives low to bot 1 and high to bot 0
value 3 goes to bot 1
bot 1 gives low to output 1 and high to bot 0
bot 0 gives low to output 2 and high to output 0
value 2 goes to bot 2
"""


@pytest.fixture
def example_text():
    """The six-line example network as text."""
    return EXAMPLE_TEXT


@pytest.fixture
def example_instructions():
    """The six-line example network, already structured."""
    from botsim.core import Target, ValueToUnit, UnitRoutes
    return [
        ValueToUnit(2, 5),
        UnitRoutes(2, Target.unit(1), Target.unit(0)),
        ValueToUnit(1, 3),
        UnitRoutes(1, Target.sink(1), Target.unit(0)),
        UnitRoutes(0, Target.sink(2), Target.sink(0)),
        ValueToUnit(2, 2),
    ]


@pytest.fixture
def make_chain():
    """
    Factory for chain networks.

    Bot 0 gets two chips; every other bot i gets one chip plus the high
    chip of bot i-1. Bot i sends its low chip to output i, and the last
    bot sends its high chip to output n.

    Returns a builder (values) -> (rules, deliveries, expected_sinks),
    where values[0] and values[1] go to bot 0 and values[i+1] to bot i.
    """
    from botsim.core import Target, ValueToUnit, UnitRoutes

    def build(values):
        n = len(values) - 1
        rules = [
            UnitRoutes(
                i,
                Target.sink(i),
                Target.unit(i + 1) if i + 1 < n else Target.sink(n),
            )
            for i in range(n)
        ]
        deliveries = [ValueToUnit(0, values[0]), ValueToUnit(0, values[1])]
        deliveries += [ValueToUnit(i, values[i + 1]) for i in range(1, n)]

        expected = {}
        carried = values[0]
        for i in range(n):
            low, high = sorted((carried, values[i + 1]))
            expected[i] = low
            carried = high
        expected[n] = carried
        return rules, deliveries, expected

    return build


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
