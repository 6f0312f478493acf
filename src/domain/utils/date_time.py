"""
Wall clock used by every time-bounded value in the auth domain.

Always call it as ``date_time.utc_now()`` (module attribute lookup), never
import the function directly.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from storage"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
