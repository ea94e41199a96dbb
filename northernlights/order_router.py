"""Mock order routing with sequential order identifiers."""

from __future__ import annotations

import itertools
import logging
import threading
from collections import deque
from dataclasses import dataclass, replace
from enum import Enum

logger = logging.getLogger(__name__)

_id_lock = threading.Lock()
_id_counter = itertools.count()


def _next_order_id() -> str:
    with _id_lock:
        number = next(_id_counter)
    return f"ORD{number:06d}"


class OrderType(Enum):
    MARKET = "Market"
    LIMIT = "Limit"
    STOP = "Stop"


class OrderSide(Enum):
    BUY = "Buy"
    SELL = "Sell"


@dataclass(frozen=True)
class Order:
    """An order; ``price`` applies to limit and stop orders."""

    symbol: str
    type: OrderType
    side: OrderSide
    quantity: float
    price: float = 0.0
    order_id: str = ""


class OrderRouter:
    """Routes orders to a simulated broker, keeping every order it sent.

    Order IDs come from one process-wide sequence, so they are unique across
    routers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sent: deque[Order] = deque()

    @property
    def sent_orders(self) -> tuple[Order, ...]:
        """Orders sent so far, oldest first, each carrying its assigned ID."""
        with self._lock:
            return tuple(self._sent)

    def send_order(self, order: Order) -> str:
        """Send ``order`` and return the ID assigned to it."""
        with self._lock:
            order_id = _next_order_id()
            self._sent.append(replace(order, order_id=order_id))
        logger.info(
            "Order sent: %s %s %s @ %s (Type: %s, ID: %s)",
            order.side.value,
            order.quantity,
            order.symbol,
            order.price,
            order.type.value,
            order_id,
        )
        return order_id

    def cancel_order(self, order_id: str) -> bool:
        """Request cancellation of an order; the simulated broker always accepts."""
        with self._lock:
            logger.info("Cancel request sent for Order ID: %s", order_id)
        return True

    def poll_order_updates(self) -> None:
        """Poll the simulated broker for fills; there are never any."""
        with self._lock:
            logger.info("Polling order updates...")