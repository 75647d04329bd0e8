#!/usr/bin/env python3
"""
Neighborhood Majority Vote Demonstration Script

Evolves a random boolean toroidal grid where each cell takes the majority
value of its L5 neighborhood. Shows wraparound neighborhoods and synchronous
map_neighborhoods updates settling into a fixed point.
"""

import argparse
import logging
import sys
from typing import Optional

import numpy as np

from toroidal_grid import ToroidalGrid, get_default_config

logger = logging.getLogger(__name__)


def majority_vote(current: bool, hood) -> bool:
    """Cell becomes alive when at least 3 of its 5 L5 cells are alive."""
    return sum(bool(value) for value in hood) >= 3


def count_alive(grid: ToroidalGrid) -> int:
    return grid.reduce(lambda total, value: total + int(value), 0)


def run_vote_demo(rows: int = 32, cols: int = 32, steps: int = 20,
                  density: float = 0.5, seed: Optional[int] = None) -> dict:
    """Run majority vote evolution and return metrics."""
    logger.info("=== L5 MAJORITY VOTE DEMONSTRATION ===")
    logger.info(f"Grid size: {rows}x{cols}")
    logger.info(f"Max steps: {steps}, initial density: {density:.2f}")

    rng = np.random.default_rng(seed)
    initial = rng.random((rows, cols)) < density
    grid = ToroidalGrid.from_array(initial, dtype=object)

    live_counts = [count_alive(grid)]
    logger.info(f"Initial live cells: {live_counts[0]}")

    converged_at = None
    for step in range(steps):
        next_grid = grid.map_neighborhoods(majority_vote)
        live_counts.append(count_alive(next_grid))
        logger.info(f"Step {step}: Live={live_counts[-1]}")

        if next_grid == grid:
            converged_at = step
            logger.info(f"Fixed point reached at step {step}")
            break
        grid = next_grid

    results = {
        "grid_size": (rows, cols),
        "steps_requested": steps,
        "seed": seed,
        "initial_live_count": live_counts[0],
        "final_live_count": live_counts[-1],
        "live_count_history": live_counts,
        "converged": converged_at is not None,
        "converged_at": converged_at,
    }

    logger.info("\n=== FINAL METRICS ===")
    logger.info(f"Final live cells: {results['final_live_count']}")
    logger.info(f"Converged: {'YES' if results['converged'] else 'NO'}")
    return results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--rows", type=int, default=32)
    parser.add_argument("--cols", type=int, default=32)
    parser.add_argument("--steps", type=int, default=20)
    parser.add_argument("--density", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=get_default_config().log_level.upper(),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    run_vote_demo(args.rows, args.cols, args.steps, args.density, args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
