"""Property-based staking simulation."""

from .actors import Actor, AssertionResult, PoolOperator, Staker
from .balance_store import BalanceStore
from .errors import BalanceMismatchError, SimulationError, StakingRevertError
from .simulation import PoolManagementSimulation, Simulation, SimulationEnvironment
from .staking import STAKING_VAULT, StakingPool, StakingSystem

__all__ = [
    "Actor", "AssertionResult", "PoolOperator", "Staker",
    "BalanceStore", "BalanceMismatchError", "SimulationError", "StakingRevertError",
    "PoolManagementSimulation", "Simulation", "SimulationEnvironment",
    "STAKING_VAULT", "StakingPool", "StakingSystem",
]
