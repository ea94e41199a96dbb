"""Alternative data such as news items with sentiment scores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AltDataPoint:
    """One piece of alternative data with a sentiment score."""

    timestamp: datetime
    source: str
    text: str
    sentiment_score: float


class AltData:
    """A store of alternative data points."""

    def __init__(self) -> None:
        self._points: list[AltDataPoint] = []

    @property
    def data(self) -> tuple[AltDataPoint, ...]:
        """All stored points in insertion order."""
        return tuple(self._points)

    def load_news(self) -> None:
        """Add a mock news event stamped with the current time."""
        logger.info("AltData loading mock macro/news events...")
        self.add_data_point(
            AltDataPoint(
                timestamp=datetime.now(timezone.utc),
                source="Reuters",
                text="Central bank hints at policy tightening",
                sentiment_score=0.65,
            )
        )

    def add_data_point(self, point: AltDataPoint) -> None:
        self._points.append(point)

    def average_sentiment(self, period: timedelta, now: datetime | None = None) -> float:
        """Mean sentiment of points stamped at or after ``now - period``.

        ``now`` defaults to the current UTC time. Returns 0.0 when no point
        falls inside the window.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        cutoff = now - period
        scores = [p.sentiment_score for p in self._points if p.timestamp >= cutoff]
        return sum(scores) / len(scores) if scores else 0.0