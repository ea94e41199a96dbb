"""Market regime detection from recent volatility and volume."""

from __future__ import annotations

import logging
import math
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from northernlights.market_data import MarketData

logger = logging.getLogger(__name__)

RECENT_VOLUME_BARS = 10


class RegimeConfigError(Exception):
    """A regime profile file could not be read or parsed."""


@dataclass(frozen=True)
class RegimeProfile:
    """Thresholds and trading style for one market regime."""

    name: str
    volatility_threshold: float = 0.0
    volume_threshold: float = 0.0
    slippage_buffer: float = 0.0
    entry_aggression: str = "moderate"


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_profile(key: str, table: dict[str, Any]) -> RegimeProfile | None:
    name = table.get("name")
    if not isinstance(name, str):
        logger.warning("Missing 'name' for '%s'", key)
        return None

    fields: dict[str, Any] = {}

    volatility = table.get("volatility_threshold")
    if isinstance(volatility, float):
        fields["volatility_threshold"] = volatility
    else:
        logger.warning("Missing 'volatility_threshold' for '%s', defaulting to 0.0", key)

    volume = table.get("volume_threshold")
    if _is_integer(volume):
        fields["volume_threshold"] = float(volume)
    else:
        logger.warning("Missing 'volume_threshold' for '%s', defaulting to 0.0", key)

    slippage = table.get("slippage_buffer")
    if isinstance(slippage, float):
        fields["slippage_buffer"] = slippage
    else:
        logger.warning("Missing 'slippage_buffer' for '%s', defaulting to 0.0", key)

    aggression = table.get("entry_aggression")
    if isinstance(aggression, str):
        fields["entry_aggression"] = aggression
    else:
        logger.warning("Missing 'entry_aggression' for '%s', defaulting to 'moderate'", key)

    return RegimeProfile(name=name, **fields)


def _log_return(previous: float, current: float) -> float:
    ratio = current / previous
    if ratio > 0.0:
        return math.log(ratio)
    return -math.inf if ratio == 0.0 else math.nan


class RegimeSwitcher:
    """Tracks which configured regime the market for a symbol is in.

    Profiles are checked in order of their keys; the first whose volatility
    and volume thresholds are both met is the detected regime.
    """

    def __init__(self, market_data: MarketData | None, symbol: str = "") -> None:
        self.market_data = market_data
        self.symbol = symbol
        self._regimes: dict[str, RegimeProfile] = {}
        self._current: str | None = None

    @property
    def profiles(self) -> dict[str, RegimeProfile]:
        """Loaded profiles keyed by regime key, in key order."""
        return {key: self._regimes[key] for key in sorted(self._regimes)}

    def load_profiles(self, filepath: str | Path) -> int:
        """Merge the regime tables of a TOML file and return how many are loaded.

        Raises RegimeConfigError if the file cannot be read or parsed.
        """
        try:
            with open(filepath, "rb") as handle:
                document = tomllib.load(handle)
        except OSError as exc:
            logger.error("Failed to open regime file '%s': %s", filepath, exc)
            raise RegimeConfigError(f"failed to open regime file: {filepath}") from exc
        except tomllib.TOMLDecodeError as exc:
            logger.error("Failed to parse regime file '%s': %s", filepath, exc)
            raise RegimeConfigError(f"failed to parse regime file {filepath}: {exc}") from exc

        for key, value in document.items():
            if not isinstance(value, dict):
                continue
            profile = _parse_profile(key, value)
            if profile is None:
                logger.warning("Skipping invalid regime '%s'", key)
            else:
                self._regimes[key] = profile

        logger.info("Loaded %d regime profiles from %s", len(self._regimes), filepath)
        return len(self._regimes)

    def detect(self, volatility: float, volume: float) -> str | None:
        """Key of the first regime whose thresholds are met, or None."""
        for key in sorted(self._regimes):
            profile = self._regimes[key]
            if volatility >= profile.volatility_threshold and volume >= profile.volume_threshold:
                return key
        return None

    def current(self) -> str | None:
        """The regime most recently switched to, or None before any match."""
        return self._current

    def update(self, symbol: str) -> str | None:
        """Re-evaluate the regime for ``symbol`` and return what was detected."""
        self.symbol = symbol
        volatility = self._compute_volatility()
        volume = self._compute_recent_volume()

        detected = self.detect(volatility, volume)
        if detected is None:
            logger.warning(
                "No matching regime found for volatility=%s volume=%s", volatility, volume
            )
        elif detected != self._current:
            self._current = detected
            logger.info("Regime switched to: %s", detected)
        return detected

    def _bars(self):
        if self.market_data is None:
            raise RuntimeError("RegimeSwitcher has no market data attached")
        return self.market_data.get_all(self.symbol)

    def _compute_volatility(self) -> float:
        """Sample standard deviation of log close-to-close returns."""
        bars = self._bars()
        if len(bars) < 2:
            return 0.0
        returns = [
            _log_return(prev.close, cur.close)
            for prev, cur in zip(bars, bars[1:])
            if prev.close > 0.0
        ]
        if len(returns) < 2:
            return 0.0
        mean = sum(returns) / len(returns)
        variance = sum((r - mean) * (r - mean) for r in returns)
        return math.sqrt(variance / (len(returns) - 1))

    def _compute_recent_volume(self) -> float:
        """Total positive volume of the most recent bars."""
        bars = self._bars()
        return sum(bar.volume for bar in bars[-RECENT_VOLUME_BARS:] if bar.volume > 0.0)

    def print_profiles(self) -> None:
        """Write a description of every loaded profile to standard output."""
        for key, profile in self.profiles.items():
            print(
                f"Regime: {key}\n"
                f"  Name: {profile.name}\n"
                f"  Volatility Threshold: {profile.volatility_threshold:g}\n"
                f"  Volume Threshold: {profile.volume_threshold:g}\n"
                f"  Slippage Buffer: {profile.slippage_buffer:g}\n"
                f"  Entry Aggression: {profile.entry_aggression}\n"
            )