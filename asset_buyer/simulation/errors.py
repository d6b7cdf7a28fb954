"""Exceptions raised by the staking simulation."""

from typing import List


class SimulationError(Exception):
    """Base exception for simulation errors."""


class StakingRevertError(SimulationError):
    """A staking call was rejected."""


class BalanceMismatchError(SimulationError):
    """Ledger balances diverged from the reference model."""

    def __init__(self, mismatches: List[str]):
        super().__init__("Balance mismatch:\n  " + "\n  ".join(mismatches))
        self.mismatches = mismatches
