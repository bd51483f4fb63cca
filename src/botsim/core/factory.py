"""
Factory: the bot-network propagation engine.

The factory holds ONLY the primitive network state:
- Chips currently held by each unit (at most two, sorted ascending)
- Pending routing rules for units that are not yet holding two chips
- Chips deposited in output sinks
- The first unit seen comparing the watched pair (if one is set)

A unit fires as soon as it both holds two chips AND has a known rule,
whichever of the two happens last. Firing sends the low chip to the
rule's low target and the high chip to its high target, which can make
further units fire. Every cascade is fully resolved before the next
instruction is applied, so between instructions the network is quiescent.

Cascades are pushed through an explicit work stack instead of recursion.
The visiting order is depth-first, low target before high target, i.e.
the same order a recursive deliver -> fire -> deliver chain would produce.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from botsim.core.errors import BotNetworkError, MalformedStateError
from botsim.core.instructions import Instruction, Target, UnitRoutes, ValueToUnit


logger = logging.getLogger(__name__)

Rule = tuple[Target, Target]


def normalize_pair(pair: tuple[int, int]) -> tuple[int, int]:
    """Order an unordered pair of chip values as (low, high)."""
    a, b = pair
    return (a, b) if a <= b else (b, a)


@dataclass
class FactoryConfig:
    """Configuration for a factory run."""

    watched_pair: tuple[int, int] | None = None  # Record first unit comparing these
    sink_policy: Literal["error", "overwrite"] = "error"  # Second write to a sink
    record_trace: bool = True  # Keep a Firing record per firing

    def __post_init__(self):
        if self.sink_policy not in ("error", "overwrite"):
            raise ValueError(f"Unknown sink_policy: {self.sink_policy}")
        if self.watched_pair is not None:
            self.watched_pair = normalize_pair(self.watched_pair)


@dataclass(frozen=True)
class Firing:
    """One firing of one unit."""

    step: int  # Global firing ordinal, starting at 0
    unit: int
    low: int
    high: int
    low_target: Target
    high_target: Target
    depth: int  # 0 = fired directly by an instruction


@dataclass
class RunResult:
    """Snapshot of a factory after a run."""

    sinks: dict[int, int]
    observed_unit: int | None
    watched_pair: tuple[int, int] | None
    n_firings: int
    firings: list[Firing] = field(default_factory=list)

    def sink_value(self, sink: int) -> int | None:
        """Chip value in `sink`, or None if nothing was ever put there."""
        return self.sinks.get(sink)


class Factory:
    """
    Push-based dataflow simulation of a bot network.

    Units and sinks are created lazily on first reference; all state is
    kept in int-keyed tables rather than a graph of objects, so routing
    cycles need no special treatment.

    One instance per query: a factory is not meant to be shared between
    threads or reused for a different watched pair.

    A MalformedStateError raised inside a cascade leaves the network half
    propagated (the firing that triggered it is already recorded and its
    remaining chips are dropped). The factory then refuses further work;
    build a new one.
    """

    def __init__(self, config: FactoryConfig | None = None):
        self.config = config if config is not None else FactoryConfig()

        self.units: dict[int, list[int]] = {}
        self.pending: dict[int, Rule] = {}
        self.sinks: dict[int, int] = {}

        self.watched_pair = self.config.watched_pair
        self.observed_unit: int | None = None

        self.n_firings = 0
        self.firings: list[Firing] = []

        self.failure: MalformedStateError | None = None

    # ═══════════════════════════════════════════════════════════════
    # Operations
    # ═══════════════════════════════════════════════════════════════

    def deliver(self, unit: int, value: int) -> None:
        """
        Hand a chip to a unit.

        If the unit now holds two chips and a rule is pending for it, it
        fires before this call returns, along with everything downstream.

        Raises:
            MalformedStateError: If the unit already holds two chips
        """
        self._drain([(Target.unit(unit), value, 0)])

    def set_rule(self, unit: int, low: Target, high: Target) -> None:
        """
        Give a unit its routing rule.

        A unit already holding two chips fires immediately with this rule.
        Otherwise the rule waits in the pending table until it does.

        Raises:
            MalformedStateError: If an earlier rule for the unit is still pending
        """
        self._check_usable()
        if len(self.units.get(unit, ())) == 2:
            self._drain(self._fire(unit, (low, high), depth=0))
            return

        if unit in self.pending:
            raise MalformedStateError(
                "received a second routing rule before the first was used",
                unit=unit,
            )
        self.pending[unit] = (low, high)

    def run(
        self,
        instructions: Iterable[Instruction],
        watched_pair: tuple[int, int] | None = None,
    ) -> RunResult:
        """
        Apply instructions in order, each to quiescence.

        Args:
            instructions: ValueToUnit / UnitRoutes sequence
            watched_pair: Chip values to watch for (overrides config)

        Returns:
            RunResult with sinks, observed unit and firing trace

        Raises:
            ValueError: If a different watched pair was already in effect, or
                the factory has already fired
        """
        if watched_pair is not None:
            pair = normalize_pair(watched_pair)
            if pair != self.watched_pair and (self.watched_pair is not None or self.n_firings > 0):
                raise ValueError(
                    f"Cannot watch {pair} on a factory already watching "
                    f"{self.watched_pair} after {self.n_firings} firings; use a new Factory"
                )
            self.watched_pair = pair

        n_instructions = 0
        for instruction in instructions:
            if isinstance(instruction, ValueToUnit):
                self.deliver(instruction.unit, instruction.value)
            elif isinstance(instruction, UnitRoutes):
                self.set_rule(instruction.unit, instruction.low, instruction.high)
            else:
                raise TypeError(f"Unknown instruction: {instruction!r}")
            n_instructions += 1

        logger.info(
            "Applied %d instructions: %d firings, %d sinks written, observed unit %s",
            n_instructions, self.n_firings, len(self.sinks), self.observed_unit,
        )
        return self.result()

    # ═══════════════════════════════════════════════════════════════
    # Queries
    # ═══════════════════════════════════════════════════════════════

    def sink_value(self, sink: int) -> int | None:
        """Chip value in `sink`, or None if nothing was ever put there."""
        return self.sinks.get(sink)

    def held(self, unit: int) -> tuple[int, ...]:
        """Chips currently held by `unit`, ascending."""
        return tuple(self.units.get(unit, ()))

    def pending_rule(self, unit: int) -> Rule | None:
        """The rule waiting for `unit` to hold two chips, if any."""
        return self.pending.get(unit)

    def is_quiescent(self) -> bool:
        """
        Post-call sanity check: no unit holds two chips with a rule waiting.

        Every public call drains its own cascade, so this only turns False
        if the tables were edited by hand.
        """
        return not any(
            len(chips) == 2 and unit in self.pending
            for unit, chips in self.units.items()
        )

    def result(self) -> RunResult:
        return RunResult(
            sinks=dict(self.sinks),
            observed_unit=self.observed_unit,
            watched_pair=self.watched_pair,
            n_firings=self.n_firings,
            firings=list(self.firings),
        )

    # ═══════════════════════════════════════════════════════════════
    # Propagation
    # ═══════════════════════════════════════════════════════════════

    def _drain(self, work: list[tuple[Target, int, int]]) -> None:
        """Deliver queued chips until nothing more can fire."""
        self._check_usable()
        stack = list(reversed(work))
        try:
            while stack:
                target, value, depth = stack.pop()
                if target.is_sink:
                    self._write_sink(target.id, value)
                else:
                    stack.extend(reversed(self._receive(target.id, value, depth)))
        except MalformedStateError as exc:
            self.failure = exc
            raise

    def _check_usable(self) -> None:
        if self.failure is not None:
            raise BotNetworkError(f"Factory stopped after an earlier error ({self.failure})")

    def _receive(self, unit: int, value: int, depth: int) -> list[tuple[Target, int, int]]:
        chips = self.units.setdefault(unit, [])
        if len(chips) == 2:
            raise MalformedStateError(
                f"cannot take chip {value}, already holding {chips[0]} and {chips[1]}",
                unit=unit,
            )
        chips.append(value)
        chips.sort()

        if len(chips) == 2 and unit in self.pending:
            return self._fire(unit, self.pending.pop(unit), depth)
        return []

    def _fire(self, unit: int, rule: Rule, depth: int) -> list[tuple[Target, int, int]]:
        """
        Fire a unit holding two chips.

        Clears the unit and returns the two outgoing deliveries, low first.
        """
        low, high = self.units.pop(unit)
        low_target, high_target = rule

        if self.observed_unit is None and self.watched_pair == (low, high):
            self.observed_unit = unit
            logger.info("bot %s compares watched chips %s and %s", unit, low, high)

        if self.config.record_trace:
            self.firings.append(Firing(
                step=self.n_firings,
                unit=unit,
                low=low,
                high=high,
                low_target=low_target,
                high_target=high_target,
                depth=depth,
            ))
        self.n_firings += 1

        logger.debug(
            "bot %s fires: %s -> %s, %s -> %s (depth %d)",
            unit, low, low_target, high, high_target, depth,
        )
        return [(low_target, low, depth + 1), (high_target, high, depth + 1)]

    def _write_sink(self, sink: int, value: int) -> None:
        if sink in self.sinks and self.config.sink_policy == "error":
            raise MalformedStateError(
                f"cannot take chip {value}, already holding {self.sinks[sink]}",
                sink=sink,
            )
        self.sinks[sink] = value
