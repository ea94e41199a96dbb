"""Risk-based position sizing."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class PositionSizer:
    """Sizes positions so that a stop-out loses a fixed share of the account.

    ``risk_per_trade_percent`` is a percentage: 1.0 means 1% of the balance.
    """

    account_balance: float
    risk_per_trade_percent: float

    def calculate_position_size(self, entry_price: float, stop_loss_price: float) -> float:
        """Units to trade for the given entry and stop prices.

        Raises ValueError if either price is not positive. Returns 0.0 when
        the stop equals the entry, since no risk distance is defined.
        """
        if entry_price <= 0.0 or stop_loss_price <= 0.0:
            logger.error("Invalid price(s) given for position sizing.")
            raise ValueError("entry and stop-loss prices must be positive")

        risk_amount = self.risk_per_trade_percent / 100.0 * self.account_balance
        stop_distance = abs(entry_price - stop_loss_price)

        if stop_distance == 0:
            logger.error("Stop loss price equals entry price; cannot calculate position size.")
            return 0.0

        size = risk_amount / stop_distance
        logger.info(
            "Calculated position size: %s units (risk amount: %s, stop distance: %s)",
            size,
            risk_amount,
            stop_distance,
        )
        return size