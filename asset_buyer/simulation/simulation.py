"""Randomized action loop checking a staking system against a reference balance model."""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import AsyncIterator, Optional

from asset_buyer.simulation.actors import AssertionResult, PoolOperator, Staker
from asset_buyer.simulation.balance_store import BalanceStore
from asset_buyer.simulation.staking import STAKING_VAULT, StakingSystem

logger = logging.getLogger(__name__)

DEFAULT_STAKER_BALANCE = 1_000_000_000


@dataclass
class SimulationEnvironment:
    """staking is the system under test; balance_store is the reference model."""
    staking: StakingSystem
    balance_store: BalanceStore
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def create(cls, staking: StakingSystem, seed: Optional[int] = None) -> "SimulationEnvironment":
        return cls(
            staking=staking,
            balance_store=BalanceStore({STAKING_VAULT: "StakingVault"}),
            rng=random.Random(seed),
        )


class Simulation(ABC):
    def __init__(self, environment: SimulationEnvironment):
        self.environment = environment
        self.steps = 0

    async def fuzz(self, max_steps: Optional[int] = None) -> int:
        """
        Run actions, checking ledger balances against the model after each one.

        Runs until max_steps actions have completed, or forever if max_steps is
        None. Any action or assertion failure propagates and stops the loop.
        """
        generator = self._assertion_generator()
        try:
            async for result in generator:
                self.environment.balance_store.assert_equals(self.environment.staking.ledger)
                self.steps += 1
                logger.debug(f"Step {self.steps}: {result.actor} {result.action} {result.details}")
                if max_steps is not None and self.steps >= max_steps:
                    break
        finally:
            await generator.aclose()
        return self.steps

    @abstractmethod
    def _assertion_generator(self) -> AsyncIterator[AssertionResult]:
        ...


class PoolManagementSimulation(Simulation):
    """Samples uniformly among stake, unstake, create pool and decrease operator share."""

    def __init__(self, environment: SimulationEnvironment, staker_balance: int = DEFAULT_STAKER_BALANCE):
        super().__init__(environment)
        self.staker_balance = staker_balance

    async def _assertion_generator(self) -> AsyncIterator[AssertionResult]:
        env = self.environment
        staker = Staker("Staker", env.staking, env.balance_store, env.rng)
        staker.configure_stake_token(self.staker_balance)
        operator = PoolOperator("Operator", env.staking, env.balance_store, env.rng)

        actions = [
            staker.simulation_actions["valid_stake"],
            staker.simulation_actions["valid_unstake"],
            operator.simulation_actions["valid_create_staking_pool"],
            operator.simulation_actions["valid_decrease_staking_pool_operator_share"],
        ]
        while True:
            action = env.rng.choice(actions)
            yield await action()
