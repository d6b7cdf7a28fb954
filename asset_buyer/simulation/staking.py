"""In-memory staking contracts: a stake vault plus operator-run staking pools."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set

from asset_buyer.constants import ONE_MILLION
from asset_buyer.simulation.balance_store import BalanceStore
from asset_buyer.simulation.errors import StakingRevertError
from asset_buyer.types import Token

logger = logging.getLogger(__name__)

STAKING_VAULT = "stakingVault"


@dataclass
class StakingPool:
    pool_id: int
    operator: str
    operator_share: int  # parts per million of pool rewards kept by the operator
    makers: Set[str] = field(default_factory=set)


class StakingSystem:
    """
    Holds staked tokens in STAKING_VAULT and tracks pools.

    Calls are async like the contract calls they stand in for. Invalid calls
    raise StakingRevertError and leave state unchanged.
    """

    def __init__(self, stake_token: Token):
        self.stake_token = stake_token
        self.ledger = BalanceStore({STAKING_VAULT: "StakingVault"})
        self.stakes: Dict[str, int] = {}
        self.pools: Dict[int, StakingPool] = {}
        self._next_pool_id = 1

    def mint(self, owner: str, amount: int):
        self.ledger.credit(owner, self.stake_token, amount)

    def staked_balance(self, owner: str) -> int:
        return self.stakes.get(owner, 0)

    def pools_operated_by(self, operator: str) -> List[StakingPool]:
        return [p for p in self.pools.values() if p.operator == operator]

    async def stake(self, owner: str, amount: int):
        balance = self.ledger.balance_of(owner, self.stake_token)
        if amount < 0 or amount > balance:
            raise StakingRevertError(f"Cannot stake {amount}: balance is {balance}")
        self.ledger.transfer(owner, STAKING_VAULT, self.stake_token, amount)
        self.stakes[owner] = self.staked_balance(owner) + amount
        logger.debug(f"{self.ledger.name_of(owner)} staked {amount}")

    async def unstake(self, owner: str, amount: int):
        staked = self.staked_balance(owner)
        if amount < 0 or amount > staked:
            raise StakingRevertError(f"Cannot unstake {amount}: staked balance is {staked}")
        self.ledger.transfer(STAKING_VAULT, owner, self.stake_token, amount)
        self.stakes[owner] = staked - amount
        logger.debug(f"{self.ledger.name_of(owner)} unstaked {amount}")

    async def create_staking_pool(self, operator: str, operator_share: int, add_operator_as_maker: bool = False) -> int:
        if not 0 <= operator_share <= ONE_MILLION:
            raise StakingRevertError(f"Operator share {operator_share} out of range")
        pool = StakingPool(pool_id=self._next_pool_id, operator=operator, operator_share=operator_share)
        if add_operator_as_maker:
            pool.makers.add(operator)
        self.pools[pool.pool_id] = pool
        self._next_pool_id += 1
        logger.debug(f"{self.ledger.name_of(operator)} created pool {pool.pool_id} (share {operator_share})")
        return pool.pool_id

    async def decrease_staking_pool_operator_share(self, caller: str, pool_id: int, new_operator_share: int):
        pool = self.pools.get(pool_id)
        if pool is None:
            raise StakingRevertError(f"Pool {pool_id} does not exist")
        if caller != pool.operator:
            raise StakingRevertError(f"Only the operator can change pool {pool_id}")
        if not 0 <= new_operator_share <= pool.operator_share:
            raise StakingRevertError(
                f"Operator share can only decrease: {pool.operator_share} -> {new_operator_share}"
            )
        pool.operator_share = new_operator_share
