import json

import pytest

from northernlights.orchestrator import Orchestrator, main

LAST_CLOSE = 119.0


@pytest.fixture
def config_dir(tmp_path):
    directory = tmp_path / "config"
    directory.mkdir()

    csv_path = tmp_path / "xauusd.csv"
    rows = ["timestamp,open,high,low,close,volume"]
    for minute in range(20):
        close = 100.0 + minute
        rows.append(
            f"2024-01-01 00:{minute:02d}:00,{close},{close + 1},{close - 1},{close},1000"
        )
    csv_path.write_text("\n".join(rows) + "\n", encoding="utf-8")

    (directory / "routes.json").write_text(
        json.dumps({"csv_data": {"symbols": {"XAUUSD": str(csv_path)}}}), encoding="utf-8"
    )
    (directory / "regime_profiles.toml").write_text(
        '[calm]\nname = "Calm"\nvolatility_threshold = 0.0\nvolume_threshold = 0\n',
        encoding="utf-8",
    )
    (directory / "strategy.cfg").write_text(json.dumps({"strategy": {"period": 14}}))
    (directory / "risk.cfg").write_text(json.dumps({"risk": {"enabled": True}}))
    return directory


def make(config_dir, ticks=2):
    return Orchestrator(config_dir, ticks=ticks, tick_interval=0, latency_ms=0)


def test_run_fills_one_order_per_tick_and_symbol(config_dir):
    fills = make(config_dir, ticks=2).run()
    assert [(fill.tick, fill.symbol) for fill in fills] == [(1, "XAUUSD"), (2, "XAUUSD")]
    assert all(fill.price > LAST_CLOSE for fill in fills)
    assert fills[0].price == fills[1].price


def test_run_wires_components(config_dir):
    orchestrator = make(config_dir, ticks=1)
    orchestrator.run()
    assert orchestrator.data_feed.loaded_symbols() == ["XAUUSD"]
    assert orchestrator.regime_switcher.current() == "calm"
    assert orchestrator.config.get("strategy.period") == 14
    assert orchestrator.config.get("risk.enabled") is True
    assert len(orchestrator.alt_data.data) == 1
    assert orchestrator.feature_engine.symbol == "XAUUSD"
    assert orchestrator.trade_executor.market_data is orchestrator.data_feed
    assert orchestrator.is_running is False


def test_missing_configuration_still_runs(tmp_path):
    orchestrator = make(tmp_path / "nowhere", ticks=3)
    assert orchestrator.run() == []
    assert orchestrator.data_feed.loaded_symbols() == []
    assert len(orchestrator.config) == 0


def test_zero_ticks_produce_no_fills(config_dir):
    assert make(config_dir, ticks=0).run() == []


def test_main_runs_and_writes_log(tmp_path):
    log_dir = tmp_path / "logs"
    status = main(
        [
            "--config-dir", str(tmp_path / "empty"),
            "--log-dir", str(log_dir),
            "--ticks", "1",
            "--tick-interval", "0",
        ]
    )
    assert status == 0
    log_text = (log_dir / "execution.log").read_text(encoding="utf-8")
    assert "Orchestrator starting..." in log_text
    assert "Shutting down orchestrator gracefully..." in log_text