# src/pm_orderbook/application/schemas.py
"""Pydantic schemas for the order book API.

Wire format is camelCase (matches the DAML payload field names and the
frontend client); Python attributes stay snake_case.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.pm_common.decimals import validate_positive_decimal
from src.pm_orderbook.domain.models import OrderInfo, TokenInfo


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenInfoOut(_CamelModel):
    issuer: str
    owner: str
    symbol: str
    amount: str
    contract_id: str

    @classmethod
    def from_domain(cls, t: TokenInfo) -> "TokenInfoOut":
        return cls(
            issuer=t.issuer,
            owner=t.owner,
            symbol=t.symbol,
            amount=t.amount,
            contract_id=t.contract_id,
        )


class OrderInfoOut(_CamelModel):
    exchange: str
    trader: str
    base_symbol: str
    quote_symbol: str
    price: str
    quantity: str
    collateral_cid: str
    contract_id: str
    order_type: Literal["buy", "sell"]

    @classmethod
    def from_domain(cls, o: OrderInfo) -> "OrderInfoOut":
        return cls(
            exchange=o.exchange,
            trader=o.trader,
            base_symbol=o.base_symbol,
            quote_symbol=o.quote_symbol,
            price=o.price,
            quantity=o.quantity,
            collateral_cid=o.collateral_cid,
            contract_id=o.contract_id,
            order_type=o.order_type.value,
        )


class PlaceOrderRequest(_CamelModel):
    order_type: Literal["buy", "sell"]
    base_symbol: str
    quote_symbol: str
    price: str
    quantity: str
    collateral_cid: str

    @field_validator("base_symbol", "quote_symbol", "collateral_cid")
    @classmethod
    def no_surrounding_whitespace(cls, v: str) -> str:
        if not v or v != v.strip():
            raise ValueError("must be non-empty with no surrounding whitespace")
        return v

    @field_validator("price", "quantity")
    @classmethod
    def positive_decimal(cls, v: str) -> str:
        return validate_positive_decimal(v)
