"""OHLCV bar storage and CSV/JSON-driven loading."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

_TIMESTAMP_PATTERNS = (
    re.compile(
        r"(?P<Y>\d{1,4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})\s*"
        r"(?P<H>\d{1,2}):(?P<M>\d{1,2}):(?P<S>\d{1,2})"
    ),
    re.compile(
        r"(?P<Y>\d{1,4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})T"
        r"(?P<H>\d{1,2}):(?P<M>\d{1,2}):(?P<S>\d{1,2})Z"
    ),
    re.compile(
        r"(?P<m>\d{1,2})/(?P<d>\d{1,2})/(?P<Y>\d{1,4})\s*"
        r"(?P<H>\d{1,2}):(?P<M>\d{1,2})"
    ),
)

_LEADING_NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

_WHITESPACE = " \t\r\n"


@dataclass(frozen=True)
class OHLCV:
    """One price bar."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


def parse_timestamp(text: str) -> datetime:
    """Parse a bar timestamp as a naive local time.

    Accepted forms are ``YYYY-MM-DD HH:MM:SS``, ``YYYY-MM-DDTHH:MM:SSZ`` and
    ``MM/DD/YYYY HH:MM``; anything after a matching prefix is ignored.
    Raises ValueError when none of them matches.
    """
    for pattern in _TIMESTAMP_PATTERNS:
        match = pattern.match(text)
        if match is None:
            continue
        fields = match.groupdict()
        try:
            return datetime(
                int(fields["Y"]),
                int(fields["m"]),
                int(fields["d"]),
                int(fields["H"]),
                int(fields["M"]),
                int(fields.get("S") or 0),
            )
        except ValueError:
            continue
    raise ValueError(f"unrecognised timestamp: {text!r}")


def _parse_number(text: str) -> float:
    """Parse the leading number of ``text``, ignoring trailing characters."""
    match = _LEADING_NUMBER.match(text.lstrip(_WHITESPACE))
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group())


class MarketData:
    """Per-symbol series of OHLCV bars."""

    def __init__(self) -> None:
        self._ticks: dict[str, list[OHLCV]] = {}
        self._streaming = False

    @property
    def streaming(self) -> bool:
        """Whether the (mock) stream has been started and not yet stopped."""
        return self._streaming

    def start(self) -> None:
        """Mark the stream as started."""
        self._streaming = True
        logger.info("MarketData stream started (mock).")

    def stop(self) -> None:
        """Mark the stream as stopped."""
        self._streaming = False
        logger.info("MarketData stream stopped.")

    def add_tick(self, symbol: str, tick: OHLCV) -> None:
        self._ticks.setdefault(symbol, []).append(tick)

    def get_latest(self, symbol: str) -> OHLCV | None:
        """The most recent bar for ``symbol``, or None if there is none."""
        ticks = self._ticks.get(symbol)
        return ticks[-1] if ticks else None

    def get_all(self, symbol: str) -> tuple[OHLCV, ...]:
        """All bars for ``symbol`` in insertion order; empty if unknown."""
        return tuple(self._ticks.get(symbol, ()))

    def average_close(self, symbol: str, last_n: int) -> float:
        """Mean close of the last ``last_n`` bars, or 0.0 if there are none."""
        ticks = self._ticks.get(symbol)
        if not ticks or last_n == 0:
            return 0.0
        closes = [tick.close for tick in ticks[-last_n:]]
        return sum(closes) / len(closes)

    def loaded_symbols(self) -> list[str]:
        return list(self._ticks)

    def load_from_config(self, router_path: str | Path) -> None:
        """Load every CSV listed under ``csv_data.symbols`` in a JSON file.

        Symbols are loaded in sorted order. Raises OSError if the file cannot
        be opened and ValueError if it is not valid JSON.
        """
        try:
            with open(router_path, encoding="utf-8") as handle:
                config = json.load(handle)
        except OSError:
            logger.error("Failed to open router config: %s", router_path)
            raise
        except ValueError as exc:
            logger.error("JSON parse error in %s: %s", router_path, exc)
            raise

        csv_data = config.get("csv_data") if isinstance(config, dict) else None
        symbols = csv_data.get("symbols") if isinstance(csv_data, dict) else None
        if symbols is None:
            logger.warning("No symbols found in CSV config.")
            return

        entries = sorted(symbols.items()) if isinstance(symbols, dict) else []
        for symbol, csv_path in entries:
            if not isinstance(csv_path, str):
                raise TypeError(f"CSV path for {symbol} must be a string")
            logger.info("Loading OHLCV for %s from %s", symbol, csv_path)
            self.load_from_csv(symbol, csv_path)

    def load_from_csv(self, symbol: str, filepath: str | Path) -> int:
        """Append bars for ``symbol`` from a CSV file and return how many loaded.

        The first line is a header. Each row is
        ``timestamp,open,high,low,close,volume``; rows with a bad timestamp or
        number are skipped with a warning. Raises OSError if the file cannot
        be opened.
        """
        try:
            handle = open(filepath, encoding="utf-8")
        except OSError:
            logger.error("Failed to open OHLCV CSV file: %s", filepath)
            raise

        parsed = skipped = 0
        with handle:
            next(handle, None)
            for raw_line in handle:
                line = raw_line.rstrip("\n")
                fields = (line.split(",") + [""] * 6)[:6]
                ts = fields[0]
                try:
                    timestamp = parse_timestamp(ts.strip(_WHITESPACE))
                except ValueError:
                    skipped += 1
                    logger.warning("Skipping malformed timestamp: '%s'", ts)
                    continue
                try:
                    open_, high, low, close, volume = (
                        _parse_number(field.strip(_WHITESPACE)) for field in fields[1:]
                    )
                except ValueError:
                    skipped += 1
                    logger.warning("Skipping malformed row: '%s'", line)
                    continue
                self.add_tick(symbol, OHLCV(timestamp, open_, high, low, close, volume))
                parsed += 1

        logger.info("Loaded %d ticks for %s (%d skipped)", parsed, symbol, skipped)
        return parsed