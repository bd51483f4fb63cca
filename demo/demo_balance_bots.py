#!/usr/bin/env python3
"""
Demo: Balance Bots

Runs a small factory where bots hand chips to each other:

1. Parse the instruction list
2. Run the factory to quiescence, watching for one comparison
3. Report which bot compared the watched chips and what reached the outputs
4. Plot the firing trace and the output bins

Usage: python demo/demo_balance_bots.py [instructions.txt] [a] [b]

Output: output/demo_balance_bots/trace.png, outputs.png
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt

from botsim.core import Factory, FactoryConfig, parse_instructions
from botsim.analysis import RoutingGraph, output_product, summarize_trace
from botsim.viz import plot_firing_trace, plot_sink_values, save_figure


EXAMPLE = """\
value 5 goes to bot 2
bot 2 gives low to bot 1 and high to bot 0
value 3 goes to bot 1
bot 1 gives low to output 1 and high to bot 0
bot 0 gives low to output 2 and high to output 0
value 2 goes to bot 2
"""


def main():
    print("=" * 60)
    print("  BALANCE BOTS")
    print("=" * 60)

    if len(sys.argv) > 1:
        text = Path(sys.argv[1]).read_text()
        a, b = (int(sys.argv[2]), int(sys.argv[3])) if len(sys.argv) > 3 else (17, 61)
    else:
        text = EXAMPLE
        a, b = 2, 5

    print("\n1. Parsing instructions...")
    instructions = parse_instructions(text)
    graph = RoutingGraph.from_instructions(instructions)
    print(f"   {len(instructions)} instructions, {graph.n_units} bots, {len(graph.sink_ids)} outputs")
    print(f"   Routing cycles: {graph.cyclic_units() or 'none'}")

    print(f"\n2. Running factory (watching {a} vs {b})...")
    factory = Factory(FactoryConfig(watched_pair=(a, b)))
    result = factory.run(instructions)
    summary = summarize_trace(result.firings)
    print(f"   {result.n_firings} firings, longest cascade {summary.max_depth}")

    print("\n3. Results")
    if result.observed_unit is None:
        print(f"   No bot compared {a} and {b}")
    else:
        print(f"   Bot comparing {a} and {b}: {result.observed_unit}")
    if all(result.sink_value(s) is not None for s in (0, 1, 2)):
        print(f"   Product of outputs 0, 1, 2: {output_product(result)}")
    else:
        print("   Outputs 0, 1, 2 not all filled")

    print("\n4. Plotting...")
    output_dir = Path("output/demo_balance_bots")
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, _ = plot_firing_trace(result.firings, highlight_unit=result.observed_unit)
    save_figure(fig, output_dir / "trace.png")
    plt.close(fig)

    fig, _ = plot_sink_values(result.sinks)
    save_figure(fig, output_dir / "outputs.png")
    plt.close(fig)
    print(f"   Saved to {output_dir}/")


if __name__ == "__main__":
    main()
