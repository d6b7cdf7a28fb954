"""Tests for the staking simulation and its reference balance model."""

import random

import pytest
from pycardano import Address, Network

from asset_buyer.constants import ONE_MILLION
from asset_buyer.simulation import (
    STAKING_VAULT, BalanceMismatchError, BalanceStore, PoolManagementSimulation, PoolOperator,
    SimulationEnvironment, Staker, StakingRevertError, StakingSystem,
)
from asset_buyer.simulation.actors import new_address
from factories import FEE_TOKEN, TOKEN_A, run


@pytest.fixture
def staking():
    return StakingSystem(FEE_TOKEN)


@pytest.fixture
def environment(staking):
    return SimulationEnvironment.create(staking, seed=7)


# =========================================================
# BalanceStore
# =========================================================


def test_transfer_moves_balance():
    store = BalanceStore()
    store.credit("alice", TOKEN_A, 10)
    store.transfer("alice", "bob", TOKEN_A, 4)
    assert store.balance_of("alice", TOKEN_A) == 6
    assert store.balance_of("bob", TOKEN_A) == 4


def test_overdraft_is_rejected():
    store = BalanceStore()
    store.credit("alice", TOKEN_A, 1)
    with pytest.raises(ValueError):
        store.debit("alice", TOKEN_A, 2)
    with pytest.raises(ValueError):
        store.credit("alice", TOKEN_A, -1)


def test_zero_transfer_from_unknown_owner():
    store = BalanceStore()
    store.transfer(STAKING_VAULT, "alice", FEE_TOKEN, 0)
    assert store.balance_of(STAKING_VAULT, FEE_TOKEN) == 0
    assert store.balance_of("alice", FEE_TOKEN) == 0


def test_unstake_nothing_before_any_stake(staking):
    run(staking.unstake("alice", 0))
    assert staking.staked_balance("alice") == 0


def test_unstake_before_stake_keeps_model_in_step(environment):
    staker = Staker("Staker", environment.staking, environment.balance_store, environment.rng)
    staker.configure_stake_token(1000)
    result = run(staker.valid_unstake())
    assert result.details == {"amount": 0}
    environment.balance_store.assert_equals(environment.staking.ledger)


@pytest.mark.parametrize("seed", range(16))
def test_fuzz_completes_for_many_seeds(seed):
    staking = StakingSystem(FEE_TOKEN)
    sim = PoolManagementSimulation(SimulationEnvironment.create(staking, seed=seed))
    assert run(sim.fuzz(max_steps=20)) == 20


def test_mismatch_names_owner_and_amounts():
    expected = BalanceStore({"alice": "Alice"})
    actual = BalanceStore()
    expected.credit("alice", TOKEN_A, 5)
    actual.credit("alice", TOKEN_A, 3)

    with pytest.raises(BalanceMismatchError) as exc_info:
        expected.assert_equals(actual)
    assert exc_info.value.mismatches == [f"Alice {TOKEN_A}: expected 5, got 3"]


def test_zero_balances_match_missing_ones():
    a, b = BalanceStore(), BalanceStore()
    a.credit("alice", TOKEN_A, 0)
    a.assert_equals(b)


def test_copy_is_independent():
    store = BalanceStore()
    store.credit("alice", TOKEN_A, 5)
    snapshot = store.copy()
    store.debit("alice", TOKEN_A, 5)
    assert snapshot.balance_of("alice", TOKEN_A) == 5


# =========================================================
# StakingSystem
# =========================================================


def test_stake_and_unstake_move_tokens_through_vault(staking):
    staking.mint("alice", 100)
    run(staking.stake("alice", 60))
    assert staking.staked_balance("alice") == 60
    assert staking.ledger.balance_of(STAKING_VAULT, FEE_TOKEN) == 60

    run(staking.unstake("alice", 10))
    assert staking.staked_balance("alice") == 50
    assert staking.ledger.balance_of("alice", FEE_TOKEN) == 50


def test_stake_beyond_balance_reverts(staking):
    staking.mint("alice", 10)
    with pytest.raises(StakingRevertError):
        run(staking.stake("alice", 11))
    assert staking.staked_balance("alice") == 0


def test_unstake_beyond_stake_reverts(staking):
    staking.mint("alice", 10)
    run(staking.stake("alice", 5))
    with pytest.raises(StakingRevertError):
        run(staking.unstake("alice", 6))


def test_pool_operator_share_bounds(staking):
    with pytest.raises(StakingRevertError):
        run(staking.create_staking_pool("op", ONE_MILLION + 1))
    pool_id = run(staking.create_staking_pool("op", 500_000, add_operator_as_maker=True))
    assert staking.pools[pool_id].makers == {"op"}
    assert staking.pools_operated_by("op") == [staking.pools[pool_id]]


def test_operator_share_only_decreases(staking):
    pool_id = run(staking.create_staking_pool("op", 500_000))
    with pytest.raises(StakingRevertError):
        run(staking.decrease_staking_pool_operator_share("op", pool_id, 500_001))
    with pytest.raises(StakingRevertError):
        run(staking.decrease_staking_pool_operator_share("someone", pool_id, 1))
    with pytest.raises(StakingRevertError):
        run(staking.decrease_staking_pool_operator_share("op", pool_id + 1, 1))

    run(staking.decrease_staking_pool_operator_share("op", pool_id, 400_000))
    assert staking.pools[pool_id].operator_share == 400_000


# =========================================================
# Actors
# =========================================================


def test_actors_get_fresh_testnet_addresses(environment):
    staker = Staker("Staker", environment.staking, environment.balance_store, environment.rng)
    operator = PoolOperator("Operator", environment.staking, environment.balance_store, environment.rng)

    assert staker.address != operator.address
    assert Address.decode(staker.address).network == Network.TESTNET
    assert environment.balance_store.name_of(staker.address) == "Staker"
    assert environment.staking.ledger.name_of(operator.address) == "Operator"


def test_new_address_for_mainnet():
    assert new_address(Network.MAINNET).startswith("addr1")


def test_decrease_without_pools_is_skipped(environment):
    operator = PoolOperator("Operator", environment.staking, environment.balance_store, environment.rng)
    result = run(operator.valid_decrease_staking_pool_operator_share())
    assert result.skipped


def test_staker_actions_keep_model_in_step(environment):
    staker = Staker("Staker", environment.staking, environment.balance_store, environment.rng)
    staker.configure_stake_token(1000)
    for _ in range(20):
        run(staker.valid_stake())
        run(staker.valid_unstake())
        environment.balance_store.assert_equals(environment.staking.ledger)


# =========================================================
# Fuzzing
# =========================================================


def test_fuzz_runs_requested_steps(environment):
    sim = PoolManagementSimulation(environment)
    assert run(sim.fuzz(max_steps=200)) == 200
    assert sim.steps == 200
    environment.balance_store.assert_equals(environment.staking.ledger)


def test_fuzz_is_reproducible_with_a_seed():
    def final_state(seed):
        staking = StakingSystem(FEE_TOKEN)
        run(PoolManagementSimulation(SimulationEnvironment.create(staking, seed=seed)).fuzz(max_steps=100))
        return sorted(staking.stakes.values()), [p.operator_share for p in staking.pools.values()]

    assert final_state(3) == final_state(3)


class LeakyStakingSystem(StakingSystem):
    """Credits the vault one extra token on every stake."""

    async def stake(self, owner, amount):
        await super().stake(owner, amount)
        self.ledger.credit(STAKING_VAULT, self.stake_token, 1)


def test_fuzz_detects_ledger_divergence():
    env = SimulationEnvironment.create(LeakyStakingSystem(FEE_TOKEN), seed=11)
    sim = PoolManagementSimulation(env)
    with pytest.raises(BalanceMismatchError, match="StakingVault"):
        run(sim.fuzz(max_steps=200))
    assert sim.steps < 200


def test_environment_defaults():
    env = SimulationEnvironment(staking=StakingSystem(FEE_TOKEN), balance_store=BalanceStore())
    assert isinstance(env.rng, random.Random)
