"""
Analysis layer: derived views of instructions and finished runs.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- find_unit_comparing / output_product: the standard questions asked of a run
- RoutingGraph: static wiring of the network (cycles, units without rules)
- summarize_trace / check_trace: statistics and guarantees of a firing trace
"""

from botsim.analysis.queries import find_unit_comparing, output_product
from botsim.analysis.routing_graph import RoutingGraph
from botsim.analysis.trace import TraceSummary, summarize_trace, check_trace

__all__ = [
    "find_unit_comparing",
    "output_product",
    "RoutingGraph",
    "TraceSummary",
    "summarize_trace",
    "check_trace",
]
