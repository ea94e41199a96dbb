"""Simulated trading engine: market data, indicators, sentiment, regimes, sizing and mock execution."""

__version__ = "0.1.0"