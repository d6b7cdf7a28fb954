#!/usr/bin/env python3
"""
Pool management fuzz run.

Usage:
    python -m asset_buyer.simulation            # runs until interrupted
    python -m asset_buyer.simulation -n 10000 --seed 7
"""

import argparse
import asyncio
import logging
import sys

from asset_buyer.constants import FEE_TOKENS
from asset_buyer.simulation import PoolManagementSimulation, SimulationEnvironment, SimulationError, StakingSystem

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-n", "--steps", type=int, default=None, help="Number of actions (default: run forever)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--network-id", type=int, default=1, choices=sorted(FEE_TOKENS), help="Network whose fee token is staked")
    args = parser.parse_args()

    staking = StakingSystem(FEE_TOKENS[args.network_id])
    sim = PoolManagementSimulation(SimulationEnvironment.create(staking, seed=args.seed))
    try:
        steps = await sim.fuzz(max_steps=args.steps)
    except SimulationError:
        logger.exception(f"Simulation failed after {sim.steps} steps")
        sys.exit(1)
    print(f"✅ {steps} actions, {len(staking.pools)} pools, {sum(staking.stakes.values())} staked")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)
