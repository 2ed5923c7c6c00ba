"""
Wall-clock relative time window for filtering events at render time.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse an upstream ISO timestamp into an aware datetime.

    ESPN emits minute-precision UTC values such as "2024-08-17T14:00Z".
    Naive values are treated as UTC.

    Returns:
        Aware datetime, or None if absent or unparseable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class TimeWindow:
    """
    Inclusive window [now - lookback_days, now + lookahead_days].

    Example:
        >>> window = TimeWindow(lookback_days=4, lookahead_days=8)
        >>> window.contains("2024-08-17T14:00Z")
    """

    lookback_days: int = 4
    lookahead_days: int = 8

    @classmethod
    def from_settings(cls, settings) -> "TimeWindow":
        """Build the window from the application settings."""
        return cls(
            lookback_days=settings.time_window.lookback_days,
            lookahead_days=settings.time_window.lookahead_days,
        )

    def bounds(self, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        """Get the (start, end) bounds relative to now."""
        now = parse_timestamp(now) or datetime.now(timezone.utc)
        return (
            now - timedelta(days=self.lookback_days),
            now + timedelta(days=self.lookahead_days),
        )

    def contains(
        self,
        timestamp: Union[str, datetime, None],
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Check whether a timestamp falls inside the window.

        Args:
            timestamp: ISO string or datetime of the event
            now: Reference moment (defaults to the current UTC time)

        Returns:
            True if inside the window; always False for absent/unparseable input
        """
        moment = parse_timestamp(timestamp)
        if moment is None:
            return False

        start, end = self.bounds(now)
        return start <= moment <= end
