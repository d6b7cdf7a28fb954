"""Token balances per owner, used both as a ledger and as the reference model."""

import copy
from typing import Dict, List, Optional

from asset_buyer.simulation.errors import BalanceMismatchError
from asset_buyer.types import Token


class BalanceStore:
    """Balances keyed by owner address, then token. Owners can be given readable names."""

    def __init__(self, token_owners: Optional[Dict[str, str]] = None):
        self.token_owners: Dict[str, str] = dict(token_owners or {})
        self._balances: Dict[str, Dict[Token, int]] = {}

    def register_token_owner(self, address: str, name: str):
        self.token_owners[address] = name

    def name_of(self, address: str) -> str:
        return self.token_owners.get(address, address[:16])

    def balance_of(self, owner: str, token: Token) -> int:
        return self._balances.get(owner, {}).get(token, 0)

    def credit(self, owner: str, token: Token, amount: int):
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        owner_balances = self._balances.setdefault(owner, {})
        owner_balances[token] = owner_balances.get(token, 0) + amount

    def debit(self, owner: str, token: Token, amount: int):
        balance = self.balance_of(owner, token)
        if amount < 0 or amount > balance:
            raise ValueError(f"{self.name_of(owner)} cannot debit {amount} {token} (balance {balance})")
        self._balances.setdefault(owner, {})[token] = balance - amount

    def transfer(self, from_owner: str, to_owner: str, token: Token, amount: int):
        self.debit(from_owner, token, amount)
        self.credit(to_owner, token, amount)

    def copy(self) -> "BalanceStore":
        return copy.deepcopy(self)

    def diff(self, other: "BalanceStore") -> List[str]:
        owners = set(self._balances) | set(other._balances)
        lines = []
        for owner in sorted(owners):
            tokens = set(self._balances.get(owner, {})) | set(other._balances.get(owner, {}))
            for token in sorted(tokens, key=lambda t: t.to_hex()):
                expected, actual = self.balance_of(owner, token), other.balance_of(owner, token)
                if expected != actual:
                    lines.append(f"{self.name_of(owner)} {token}: expected {expected}, got {actual}")
        return lines

    def assert_equals(self, other: "BalanceStore"):
        """Raise BalanceMismatchError if other holds different balances."""
        mismatches = self.diff(other)
        if mismatches:
            raise BalanceMismatchError(mismatches)
