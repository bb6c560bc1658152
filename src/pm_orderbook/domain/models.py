"""Domain models for pm_orderbook — frozen snapshots of active ledger contracts.

Every numeric field (amount, price, quantity) is the ledger's Decimal rendered
as a string, passed through untouched.
"""

from dataclasses import dataclass

from src.pm_common.enums import OrderType


@dataclass(frozen=True)
class TokenInfo:
    """One active OrderBook:Token holding."""

    issuer: str
    owner: str
    symbol: str
    amount: str
    contract_id: str


@dataclass(frozen=True)
class OrderInfo:
    """One active OrderBook:BuyOrder or OrderBook:SellOrder.

    order_type is set from the template the row was read from.
    """

    exchange: str
    trader: str
    base_symbol: str
    quote_symbol: str
    price: str
    quantity: str
    collateral_cid: str
    contract_id: str
    order_type: OrderType
