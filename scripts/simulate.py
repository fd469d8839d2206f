"""Run many headless Witch! sessions and print aggregate stats.

Usage:
    uv run python scripts/simulate.py [--runs N] [--agent random|heuristic] [--seed N]
"""

from __future__ import annotations

import argparse
import logging
import time

import numpy as np

from witch_rogue.sim.play_agents import HeuristicAgent, RandomAgent
from witch_rogue.sim.report import generate_text_report
from witch_rogue.sim.runner import BatchRunner

_AGENTS = {"random": RandomAgent, "heuristic": HeuristicAgent}


def main() -> None:
    parser = argparse.ArgumentParser(description="Batch-simulate Witch! sessions")
    parser.add_argument("--runs", type=int, default=100, help="Number of sessions")
    parser.add_argument("--agent", choices=sorted(_AGENTS), default="heuristic")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    runner = BatchRunner(_AGENTS[args.agent])
    print(f"Running {args.runs} sessions with {args.agent} agent...")
    t0 = time.perf_counter()
    results = runner.run_batch(args.runs, base_seed=args.seed)
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s ({elapsed / max(args.runs, 1) * 1000:.0f}ms/run)")

    reached = np.array([r.levels_reached for r in results])
    hp_lost = np.array([lvl.hp_lost for r in results for lvl in r.levels])
    print(f"Levels reached: mean {reached.mean():.1f}, median {np.median(reached):.0f}")
    if hp_lost.size:
        print(f"HP lost per level: mean {hp_lost.mean():.1f}, p90 {np.percentile(hp_lost, 90):.0f}")
    print()
    print(generate_text_report(results))


if __name__ == "__main__":
    main()
