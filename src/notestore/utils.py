from collections.abc import Callable
from datetime import UTC, datetime, timedelta

_ONE_MS = timedelta(milliseconds=1)


def now() -> datetime:
    """Current UTC time truncated to milliseconds, the precision BSON dates keep."""
    current = datetime.now(UTC)
    return current.replace(microsecond=current.microsecond // 1000 * 1000)


class StrictClock:
    """Millisecond clock whose readings always increase.

    A reading that would equal or precede the previous one (two writes in the
    same millisecond, or the wall clock stepping back) is bumped to one
    millisecond past it. The guarantee holds per instance, i.e. per process.
    """

    def __init__(self, source: Callable[[], datetime] = now) -> None:
        self._source = source
        self._last: datetime | None = None

    def __call__(self) -> datetime:
        current = self._source()
        if self._last is not None and current <= self._last:
            current = self._last + _ONE_MS
        self._last = current
        return current
