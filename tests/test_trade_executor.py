from datetime import datetime
from unittest import mock

import pytest

from northernlights.market_data import OHLCV, MarketData
from northernlights.trade_executor import ExecutionError, TradeExecutor


def make_market(*closes, symbol="XAUUSD"):
    md = MarketData()
    for i, close in enumerate(closes):
        md.add_tick(symbol, OHLCV(datetime(2024, 1, 1, 0, i), close, close, close, close, 10.0))
    return md


def test_defaults_match_documented_values():
    executor = TradeExecutor()
    assert executor.slippage_percent == 0.05
    assert executor.latency_ms == 100
    assert executor.market_data is None


def test_buy_adds_slippage_to_latest_close():
    executor = TradeExecutor(0.05, 0, make_market(90.0, 100.0))
    assert executor.execute_order("XAUUSD", 10, True) == pytest.approx(100.0 * (1 + 0.05))


def test_sell_subtracts_slippage():
    executor = TradeExecutor(0.05, 0, make_market(100.0))
    assert executor.execute_order("XAUUSD", 10, False) == pytest.approx(100.0 * (1 - 0.05))


def test_zero_slippage_fills_at_close():
    executor = TradeExecutor(0.0, 0, make_market(1234.5))
    assert executor.execute_order("XAUUSD", 1, True) == 1234.5
    assert executor.execute_order("XAUUSD", 1, False) == 1234.5


def test_sell_below_buy():
    executor = TradeExecutor(0.01, 0, make_market(200.0))
    sell = executor.execute_order("XAUUSD", 1, False)
    buy = executor.execute_order("XAUUSD", 1, True)
    assert sell < 200.0 < buy


def test_without_market_data_raises():
    with pytest.raises(ExecutionError):
        TradeExecutor(latency_ms=0).execute_order("XAUUSD", 10, True)


def test_unknown_symbol_raises():
    executor = TradeExecutor(latency_ms=0, market_data=make_market(100.0))
    with pytest.raises(ExecutionError):
        executor.execute_order("EURUSD", 10, True)


def test_latency_is_simulated():
    executor = TradeExecutor(0.0, 250, make_market(100.0))
    with mock.patch("northernlights.trade_executor.time.sleep") as sleep:
        price = executor.execute_order("XAUUSD", 1, True)
    sleep.assert_called_once_with(0.25)
    assert price == 100.0


def test_market_data_can_be_attached_later():
    executor = TradeExecutor(0.0, 0)
    executor.market_data = make_market(42.0)
    assert executor.execute_order("XAUUSD", 1, True) == 42.0