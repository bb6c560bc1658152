"""Global enums — values must match the DAML model and the wire format exactly."""

from enum import Enum


class OrderType(str, Enum):
    """Order side as exposed over HTTP. Not stored in the ledger payload."""
    BUY = "buy"
    SELL = "sell"


class DamlTemplate(str, Enum):
    """Qualified template names accepted by PQS ``active(...)``."""
    TOKEN = "OrderBook:Token"
    BUY_ORDER = "OrderBook:BuyOrder"
    SELL_ORDER = "OrderBook:SellOrder"
    EXCHANGE = "OrderBook:Exchange"


class AuthMode(str, Enum):
    OAUTH2 = "oauth2"
    SHARED_SECRET = "shared-secret"
