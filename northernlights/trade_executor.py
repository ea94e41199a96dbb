"""Simulated order execution against the latest market bar."""

from __future__ import annotations

import logging
import time

from northernlights.market_data import MarketData

logger = logging.getLogger(__name__)


class ExecutionError(RuntimeError):
    """An order could not be executed."""


class TradeExecutor:
    """Fills orders at the latest close, adjusted by slippage, after a delay.

    ``slippage_percent`` is a fraction of the price (0.05 means 5%), and
    ``latency_ms`` is the simulated delay before each fill.
    """

    def __init__(
        self,
        slippage_percent: float = 0.05,
        latency_ms: int = 100,
        market_data: MarketData | None = None,
    ) -> None:
        self.slippage_percent = slippage_percent
        self.latency_ms = latency_ms
        self.market_data = market_data

    def _apply_slippage(self, price: float, is_buy: bool) -> float:
        slippage = price * self.slippage_percent
        return price + slippage if is_buy else price - slippage

    def execute_order(self, symbol: str, quantity: float, is_buy: bool) -> float:
        """Fill an order and return the executed price.

        Raises ExecutionError if no market data is attached or the symbol has
        no bars.
        """
        time.sleep(self.latency_ms / 1000.0)

        if self.market_data is None:
            logger.error("MarketData is not attached. Cannot execute order.")
            raise ExecutionError("no market data attached")

        latest = self.market_data.get_latest(symbol)
        if latest is None:
            logger.error("No market data available for symbol '%s' to execute order.", symbol)
            raise ExecutionError(f"no market data for symbol {symbol!r}")

        raw_price = latest.close
        stamp = latest.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        executed = self._apply_slippage(raw_price, is_buy)

        logger.info(
            "%s order executed: %s %s @ %.4f (raw %.4f, slippage %.2f%%) | Market TS: %s",
            "BUY" if is_buy else "SELL",
            quantity,
            symbol,
            executed,
            raw_price,
            self.slippage_percent * 100.0,
            stamp,
        )
        return executed