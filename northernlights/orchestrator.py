"""Wires data, features, regimes and execution into one strategy run."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from northernlights.alt_data import AltData
from northernlights.config import ConfigError, ConfigLoader
from northernlights.features import FeatureEngine
from northernlights.logger import get_logger
from northernlights.market_data import MarketData
from northernlights.regime_switcher import RegimeConfigError, RegimeSwitcher
from northernlights.trade_executor import TradeExecutor

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("../../config")
STRATEGY_CONFIG = "strategy.cfg"
RISK_CONFIG = "risk.cfg"
REGIME_PROFILES = "regime_profiles.toml"
ROUTES_CONFIG = "routes.json"

DEFAULT_TICKS = 5
DEFAULT_TICK_INTERVAL = 0.5
ORDER_QUANTITY = 10


@dataclass(frozen=True)
class Fill:
    """An order filled during the strategy loop."""

    tick: int
    symbol: str
    price: float


class Orchestrator:
    """Loads configuration, starts the data pipeline and runs the strategy loop."""

    def __init__(
        self,
        config_dir: str | Path = DEFAULT_CONFIG_DIR,
        *,
        ticks: int = DEFAULT_TICKS,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        latency_ms: int = 100,
    ) -> None:
        self.config_dir = Path(config_dir)
        self.ticks = ticks
        self.tick_interval = tick_interval
        self.is_running = False

        self.config = ConfigLoader()
        self.data_feed = MarketData()
        self.feature_engine = FeatureEngine()
        self.alt_data = AltData()
        self.trade_executor = TradeExecutor(latency_ms=latency_ms)
        self.regime_switcher = RegimeSwitcher(self.data_feed)

    def run(self) -> list[Fill]:
        """Run the whole session and return the fills it produced."""
        logger.info("Orchestrator starting...")
        self._load_config()
        self._start_data_pipeline()
        self.trade_executor.market_data = self.data_feed

        self.is_running = True
        try:
            return self._run_strategy_loop()
        finally:
            self._shutdown()

    def _load_config(self) -> bool:
        logger.info("Loading configuration files...")
        ok = True
        for name in (STRATEGY_CONFIG, RISK_CONFIG):
            try:
                self.config.load(self.config_dir / name)
            except ConfigError:
                ok = False
        try:
            self.regime_switcher.load_profiles(self.config_dir / REGIME_PROFILES)
        except RegimeConfigError:
            ok = False

        if ok:
            logger.info("All configuration files loaded successfully.")
        else:
            logger.warning("One or more configuration files failed to load.")

        self.config.log_values()
        self.regime_switcher.print_profiles()
        return ok

    def _start_data_pipeline(self) -> None:
        logger.info("Bootstrapping data ingestion pipeline...")
        try:
            self.data_feed.load_from_config(self.config_dir / ROUTES_CONFIG)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Market data routes not loaded: %s", exc)
        self.data_feed.start()
        self.feature_engine.market_data = self.data_feed
        self.alt_data.load_news()

    def _run_strategy_loop(self) -> list[Fill]:
        logger.info("Entering strategy execution loop...")
        symbols = self.data_feed.loaded_symbols()
        fills: list[Fill] = []
        for tick in range(1, self.ticks + 1):
            logger.info("Tick %d: evaluating market conditions...", tick)
            for symbol in symbols:
                logger.info("Processing symbol: %s", symbol)
                self.feature_engine.symbol = symbol
                self.feature_engine.compute()
                self.regime_switcher.update(symbol)
                price = self.trade_executor.execute_order(symbol, ORDER_QUANTITY, True)
                fills.append(Fill(tick, symbol, price))
            time.sleep(self.tick_interval)
        return fills

    def _shutdown(self) -> None:
        logger.info("Shutting down orchestrator gracefully...")
        self.data_feed.stop()
        self.is_running = False


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="northernlights", description="Run the trading engine session."
    )
    parser.add_argument("--config-dir", default=str(DEFAULT_CONFIG_DIR))
    parser.add_argument("--log-dir", default="logs")
    parser.add_argument("--ticks", type=int, default=DEFAULT_TICKS)
    parser.add_argument("--tick-interval", type=float, default=DEFAULT_TICK_INTERVAL)
    args = parser.parse_args(argv)

    log = get_logger(args.log_dir)
    log.info("TheNorthernLights trading engine initializing...")
    try:
        Orchestrator(
            args.config_dir, ticks=args.ticks, tick_interval=args.tick_interval
        ).run()
    except Exception as exc:
        log.error("Unhandled exception: %s", exc)
        return 1
    log.info("Build & execution completed. Time to make alpha.")
    return 0


if __name__ == "__main__":
    sys.exit(main())