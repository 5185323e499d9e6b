"""Clock adapters."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo


class SystemClock:
    """
    Wall clock.

    Implements Clock protocol. With no timezone the machine's local time is
    used; otherwise the named IANA zone.
    """

    def __init__(self, timezone: str = ""):
        self.timezone = timezone
        self._tz = ZoneInfo(timezone) if timezone else None

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock:
    """
    Settable clock.

    Implements Clock protocol. Stays at one moment until moved.
    """

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = moment

    def advance(self, **kwargs) -> datetime:
        """Move forward by timedelta keyword arguments (days=1, seconds=60...)."""
        self.moment = self.moment + timedelta(**kwargs)
        return self.moment
