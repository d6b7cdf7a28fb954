"""
Core types for the asset buyer.

Token and Asset identify what is traded; the remaining dataclasses are the
values passed between the order cache, the quote calculator and callers.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from asset_buyer.orders.base import Order


@dataclass(frozen=True)
class Token:
    """
    Represents a Cardano native token.

    ADA is represented with empty policy_id and name.
    Name is stored as hex (not decoded).
    """
    policy_id: str
    name: str  # hex encoded

    @property
    def is_ada(self) -> bool:
        return self.policy_id == "" and self.name == ""

    @classmethod
    def ada(cls) -> "Token":
        return cls(policy_id="", name="")

    @classmethod
    def from_hex(cls, hex_str: str) -> "Token":
        """
        Create from concatenated hex string (policy_id + name).
        Policy ID is always 56 hex chars (28 bytes).
        """
        if not hex_str or hex_str == "lovelace" or hex_str == ".":
            return cls.ada()
        if "." in hex_str:
            hex_str = hex_str.replace(".", "")
        if len(hex_str) <= 56:
            return cls(policy_id=hex_str, name="")
        return cls(policy_id=hex_str[:56], name=hex_str[56:])

    def to_hex(self) -> str:
        return f"{self.policy_id}{self.name}"

    def __str__(self) -> str:
        if self.is_ada:
            return "ADA"
        try:
            decoded = bytes.fromhex(self.name).decode("utf-8")
            return f"{self.policy_id[:8]}..{decoded}"
        except (ValueError, UnicodeDecodeError):
            return f"{self.policy_id[:8]}..{self.name[:8]}"


@dataclass(frozen=True)
class Asset:
    """Token with amount."""
    amount: int
    token: Token

    def __str__(self) -> str:
        return f"{self.amount} {self.token}"


ADA = Token.ada()


@dataclass(frozen=True)
class OrdersAndFillableAmounts:
    """
    Orders for one maker/taker pair with the maker amount still fillable on each.

    Both tuples are parallel: remaining_fillable_maker_asset_amounts[i] belongs to orders[i].
    """
    orders: Tuple["Order", ...] = ()
    remaining_fillable_maker_asset_amounts: Tuple[int, ...] = ()

    def __post_init__(self):
        if len(self.orders) != len(self.remaining_fillable_maker_asset_amounts):
            raise ValueError("orders and remaining fillable amounts must have the same length")

    @classmethod
    def from_pairs(cls, pairs: List[Tuple["Order", int]]) -> "OrdersAndFillableAmounts":
        return cls(
            orders=tuple(order for order, _ in pairs),
            remaining_fillable_maker_asset_amounts=tuple(amount for _, amount in pairs),
        )

    def pairs(self) -> List[Tuple["Order", int]]:
        return list(zip(self.orders, self.remaining_fillable_maker_asset_amounts))

    def __len__(self) -> int:
        return len(self.orders)

    def __bool__(self) -> bool:
        return bool(self.orders)


EMPTY_ORDERS_AND_FILLABLE_AMOUNTS = OrdersAndFillableAmounts()


@dataclass(frozen=True)
class BuyQuoteInfo:
    """Taker asset amounts needed to execute a quote (fees included in total)."""
    taker_asset_amount: int
    fee_taker_asset_amount: int
    total_taker_asset_amount: int


@dataclass(frozen=True)
class BuyQuote:
    """
    Snapshot of the orders needed to buy maker_asset_buy_amount, and what it costs.

    fill_amounts are what each order delivers; consumed_amounts are what each
    order gives up, which is larger when buying the fee token.
    """
    maker_asset_data: str
    taker_asset_data: str
    maker_asset_buy_amount: int
    orders: OrdersAndFillableAmounts
    fill_amounts: Tuple[int, ...]
    consumed_amounts: Tuple[int, ...]
    fee_orders: OrdersAndFillableAmounts
    best_case_quote_info: BuyQuoteInfo
    worst_case_quote_info: BuyQuoteInfo
    slippage_percentage: Decimal

    def remaining_orders_and_fillable_amounts(self) -> OrdersAndFillableAmounts:
        """Selected orders with the amounts this quote consumes subtracted."""
        return OrdersAndFillableAmounts.from_pairs([
            (order, fillable - filled)
            for (order, fillable), filled in zip(self.orders.pairs(), self.consumed_amounts)
            if fillable - filled > 0
        ])


@dataclass(frozen=True)
class LiquidityForAssetData:
    maker_tokens_available_in_base_units: int = 0
    taker_tokens_available_in_base_units: int = 0


__all__ = [
    "Token", "Asset", "ADA",
    "OrdersAndFillableAmounts", "EMPTY_ORDERS_AND_FILLABLE_AMOUNTS",
    "BuyQuoteInfo", "BuyQuote", "LiquidityForAssetData",
]
