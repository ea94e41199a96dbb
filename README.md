# northernlights

A compact, simulated trading engine. It loads OHLCV bars from CSV files,
computes technical indicators, keeps news items with sentiment scores,
detects the market regime from configurable profiles, sizes positions by
risk, and fills mock orders at the latest close with simulated slippage and
latency.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the engine

```
northernlights
```

Options:

- `--config-dir DIR`: where the configuration files are (default
  `../../config`, relative to the working directory).
- `--log-dir DIR`: where `execution.log` is written (default `logs`); the
  file is truncated at start-up.
- `--ticks N`: number of strategy ticks (default 5).
- `--tick-interval SECONDS`: pause after each tick (default 0.5).

A session loads the configuration, loads market data, adds one mock news
item, then on every tick, for every loaded symbol, computes the indicators,
updates the regime and fills a simulated buy of 10 units. The command exits
with status 0 on success and 1 if an exception ends the session.

Files read from the configuration directory:

- `strategy.cfg` and `risk.cfg`: JSON objects; nested keys are flattened
  into dotted names such as `risk.max_drawdown`.
- `regime_profiles.toml`: one table per regime, for example

  ```toml
  [news_driven]
  name = "News driven"
  volatility_threshold = 0.05
  volume_threshold = 2000000
  slippage_buffer = 0.002
  entry_aggression = "aggressive"
  ```

  `volatility_threshold` and `slippage_buffer` must be floats and
  `volume_threshold` an integer; a missing or mistyped field falls back to
  its default (0.0, or `"moderate"` for `entry_aggression`) with a warning.
  A table without `name` is skipped.
- `routes.json`: the CSV file to load for each symbol:

  ```json
  {"csv_data": {"symbols": {"XAUUSD": "data/xauusd.csv"}}}
  ```

A missing or unreadable configuration file is logged as a warning and the
session goes on. Filling an order for a symbol that has no bars, however,
ends the session with an error.

CSV files have a header row followed by
`timestamp,open,high,low,close,volume` rows. Timestamps may be written as
`2024-01-02 15:30:00`, `2024-01-02T15:30:00Z` or `01/02/2024 15:30` and are
read as naive local times. Malformed rows are skipped with a warning.

## Using the library

### Market data and indicators

```python
from datetime import datetime

from northernlights.market_data import OHLCV, MarketData
from northernlights.features import sma, rsi, vwap, atr

md = MarketData()
md.add_tick("XAUUSD", OHLCV(datetime(2024, 1, 2, 9, 0), 100.0, 105.0, 95.0, 102.0, 1500.0))
md.add_tick("XAUUSD", OHLCV(datetime(2024, 1, 2, 9, 1), 102.0, 108.0, 101.0, 107.0, 1600.0))

bars = md.get_all("XAUUSD")
print(md.get_latest("XAUUSD").close)     # 107.0
print(md.average_close("XAUUSD", 2))     # 104.5
print(sma(bars, 2))                      # 104.5
print(sma(bars, 14))                     # None: not enough bars
```

`MarketData.load_from_csv(symbol, path)` appends bars and returns how many
were loaded; `load_from_config(path)` loads every CSV named in a
`routes.json`-style file. `loaded_symbols()` lists the symbols held.

`sma` and `vwap` need at least `period` bars; `rsi` and `atr` need
`period + 1`. Each returns `None` when there is not enough data (and `vwap`
also when total volume is not positive); a period below 1 raises
`ValueError`. `FeatureEngine(market_data, symbol).compute()` returns all four
with period 14 as a dict keyed `"SMA"`, `"RSI"`, `"VWAP"` and `"ATR"`.

### Position sizing

```python
from northernlights.position_sizer import PositionSizer

sizer = PositionSizer(10_000.0, 1.0)               # balance, percent risked per trade
print(sizer.calculate_position_size(50.0, 48.0))   # 50.0 units
```

A stop loss equal to the entry price gives `0.0`; a non-positive price
raises `ValueError`.

### Sentiment

`AltData` collects `AltDataPoint` records (timestamp, source, text,
sentiment score). `average_sentiment(period, now)` averages the scores
stamped at or after `now - period`; an empty window gives `0.0`.

### Regimes

`RegimeSwitcher(market_data)` loads profiles with `load_profiles(path)` and,
on `update(symbol)`, computes the sample standard deviation of log returns
of the closes and the total volume of the last 10 bars. The first regime, by
key order, whose thresholds are both met becomes `current()`.

### Other components

- `OrderRouter.send_order(order)` takes an `Order` (with `OrderType` and
  `OrderSide`) and returns a sequential ID such as `ORD000000`;
  `sent_orders` holds every order sent. `cancel_order` always succeeds.
- `TradeExecutor.execute_order(symbol, quantity, is_buy)` fills at the
  latest close moved by `slippage_percent` (a fraction: 0.05 is 5%) after
  `latency_ms`, and raises `ExecutionError` when there is no data.
- `Scheduler` runs callables at fixed intervals (a `timedelta` or seconds)
  on a background thread; it is also a context manager.
- `RestServer(port)` serves `/` and `/health` over HTTP on a background
  thread; it is also a context manager.
- `ConfigLoader` reads JSON configuration; `get(key, default)` returns the
  default when the key is missing or its value has another type.
- `get_logger(log_dir)` sets up the shared console and file logger.

## What it does not do

- Nothing reaches a real broker or exchange: orders are only recorded in
  memory and fills are computed from stored bars.
- Nothing is stored between runs apart from the log file.
- The `northernlights` command does not start the REST server or the
  scheduler, and does not use `OrderRouter` or `PositionSizer`; those are
  available to code that imports them.