"""Technical indicators computed over OHLCV bars."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import pairwise

from northernlights.market_data import OHLCV, MarketData

logger = logging.getLogger(__name__)

PERIOD = 14
DEFAULT_SYMBOL = "XAUUSD"


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be at least 1, got {period}")


def sma(data: Sequence[OHLCV], period: int) -> float | None:
    """Simple moving average of the last ``period`` closes, or None if too few bars."""
    _check_period(period)
    if len(data) < period:
        return None
    return sum(bar.close for bar in data[-period:]) / period


def rsi(data: Sequence[OHLCV], period: int) -> float | None:
    """Relative strength index over the last ``period`` close-to-close moves.

    Needs ``period + 1`` bars; returns None otherwise. With no losing move
    the result is 100.
    """
    _check_period(period)
    if len(data) < period + 1:
        return None
    gain = loss = 0.0
    for prev, cur in pairwise(data[-(period + 1):]):
        delta = cur.close - prev.close
        if delta >= 0:
            gain += delta
        else:
            loss -= delta
    if loss == 0:
        return 100.0
    return 100.0 - 100.0 / (1.0 + gain / loss)


def vwap(data: Sequence[OHLCV], period: int) -> float | None:
    """Volume-weighted typical price of the last ``period`` bars.

    Returns None when there are too few bars or the total volume is not positive.
    """
    _check_period(period)
    if len(data) < period:
        return None
    window = data[-period:]
    weighted = sum((bar.high + bar.low + bar.close) / 3.0 * bar.volume for bar in window)
    volume = sum(bar.volume for bar in window)
    return weighted / volume if volume > 0.0 else None


def atr(data: Sequence[OHLCV], period: int) -> float | None:
    """Average true range over the last ``period`` bars; needs ``period + 1`` bars."""
    _check_period(period)
    if len(data) < period + 1:
        return None
    total = sum(
        max(cur.high - cur.low, abs(cur.high - prev.close), abs(cur.low - prev.close))
        for prev, cur in pairwise(data[-(period + 1):])
    )
    return total / period


_INDICATORS = {"SMA": sma, "RSI": rsi, "VWAP": vwap, "ATR": atr}


class FeatureEngine:
    """Computes the standard indicator set for one symbol of a MarketData store."""

    def __init__(self, market_data: MarketData | None = None, symbol: str = DEFAULT_SYMBOL) -> None:
        self.market_data = market_data
        self.symbol = symbol

    def compute(self) -> dict[str, float | None]:
        """Compute every indicator with the default period for the active symbol.

        Returns a mapping from indicator name to value, None where there is
        not enough data. Raises RuntimeError if no market data is attached.
        """
        if self.market_data is None:
            logger.error("FeatureEngine: MarketData not injected.")
            raise RuntimeError("FeatureEngine has no market data attached")

        data = self.market_data.get_all(self.symbol)
        logger.info("FeatureEngine: Computing features on %d bars...", len(data))

        results: dict[str, float | None] = {}
        for name, indicator in _INDICATORS.items():
            value = indicator(data, PERIOD)
            if value is None:
                logger.info("Not enough data for %s(%d)", name, PERIOD)
            else:
                logger.info("%s(%d): %s", name, PERIOD, value)
            results[name] = value
        return results