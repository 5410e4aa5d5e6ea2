"""System clock — timezone-aware UTC timestamps for created_at/updated_at."""

from datetime import datetime, timezone


class SystemClock:
    """ClockSource backed by the wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
