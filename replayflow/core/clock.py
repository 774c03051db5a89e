"""
Timestamp sources for continuation bookkeeping.

The engine only reads the clock to stamp "created"/"updated" keys on the
root node; flow logic must never depend on it.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


class SystemClock:
    """Wall-clock time as ISO-8601 UTC strings."""

    def now(self) -> str:
        return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class FixedClock:
    """
    Clock pinned to a single timestamp.

    In tests: makes stamped continuations byte-for-byte comparable.
    """
    current: str = "1970-01-01T00:00:00+00:00"

    def now(self) -> str:
        return self.current
