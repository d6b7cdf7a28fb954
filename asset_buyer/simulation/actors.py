"""Simulation actors and the valid actions each can take."""

import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict

from pycardano import Address, Network, PaymentSigningKey

from asset_buyer.constants import ONE_MILLION
from asset_buyer.simulation.balance_store import BalanceStore
from asset_buyer.simulation.errors import SimulationError
from asset_buyer.simulation.staking import STAKING_VAULT, StakingSystem

Action = Callable[[], Awaitable["AssertionResult"]]


@dataclass
class AssertionResult:
    """Outcome of one action. skipped is set when no valid parameters existed."""
    action: str
    actor: str
    details: Dict[str, Any] = field(default_factory=dict)
    skipped: bool = False


def new_address(network: Network = Network.TESTNET) -> str:
    """Enterprise address for a freshly generated payment key."""
    verification_key = PaymentSigningKey.generate().to_verification_key()
    return str(Address(payment_part=verification_key.hash(), network=network))


class Actor:
    def __init__(self, name: str, staking: StakingSystem, balance_store: BalanceStore, rng: random.Random):
        self.name = name
        self.address = new_address()
        self.staking = staking
        self.balance_store = balance_store
        self.rng = rng
        staking.ledger.register_token_owner(self.address, name)
        balance_store.register_token_owner(self.address, name)

    @property
    def simulation_actions(self) -> Dict[str, Action]:
        return {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class Staker(Actor):
    def configure_stake_token(self, amount: int):
        """Give the staker amount stake tokens in both the ledger and the reference model."""
        self.staking.mint(self.address, amount)
        self.balance_store.credit(self.address, self.staking.stake_token, amount)

    @property
    def simulation_actions(self) -> Dict[str, Action]:
        return {"valid_stake": self.valid_stake, "valid_unstake": self.valid_unstake}

    async def valid_stake(self) -> AssertionResult:
        token = self.staking.stake_token
        amount = self.rng.randint(0, self.balance_store.balance_of(self.address, token))
        self.balance_store.transfer(self.address, STAKING_VAULT, token, amount)
        staked_before = self.staking.staked_balance(self.address)
        await self.staking.stake(self.address, amount)
        _expect(self.staking.staked_balance(self.address) == staked_before + amount, "stake not recorded")
        return AssertionResult("valid_stake", self.name, {"amount": amount})

    async def valid_unstake(self) -> AssertionResult:
        token = self.staking.stake_token
        staked_before = self.staking.staked_balance(self.address)
        amount = self.rng.randint(0, staked_before)
        self.balance_store.transfer(STAKING_VAULT, self.address, token, amount)
        await self.staking.unstake(self.address, amount)
        _expect(self.staking.staked_balance(self.address) == staked_before - amount, "unstake not recorded")
        return AssertionResult("valid_unstake", self.name, {"amount": amount})


class PoolOperator(Actor):
    @property
    def simulation_actions(self) -> Dict[str, Action]:
        return {
            "valid_create_staking_pool": self.valid_create_staking_pool,
            "valid_decrease_staking_pool_operator_share": self.valid_decrease_staking_pool_operator_share,
        }

    async def valid_create_staking_pool(self) -> AssertionResult:
        operator_share = self.rng.randint(0, ONE_MILLION)
        add_as_maker = self.rng.random() < 0.5
        pool_id = await self.staking.create_staking_pool(self.address, operator_share, add_as_maker)
        pool = self.staking.pools.get(pool_id)
        _expect(pool is not None and pool.operator == self.address, f"pool {pool_id} not created")
        _expect(pool.operator_share == operator_share, f"pool {pool_id} has wrong operator share")
        return AssertionResult(
            "valid_create_staking_pool", self.name, {"pool_id": pool_id, "operator_share": operator_share},
        )

    async def valid_decrease_staking_pool_operator_share(self) -> AssertionResult:
        pools = self.staking.pools_operated_by(self.address)
        if not pools:
            return AssertionResult("valid_decrease_staking_pool_operator_share", self.name, skipped=True)
        pool = self.rng.choice(pools)
        new_share = self.rng.randint(0, pool.operator_share)
        await self.staking.decrease_staking_pool_operator_share(self.address, pool.pool_id, new_share)
        _expect(self.staking.pools[pool.pool_id].operator_share == new_share, "operator share not updated")
        return AssertionResult(
            "valid_decrease_staking_pool_operator_share", self.name,
            {"pool_id": pool.pool_id, "operator_share": new_share},
        )


def _expect(condition: bool, message: str):
    if not condition:
        raise SimulationError(message)
