"""marketcard.core.time

The only time helper surface in the codebase.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return an aware UTC datetime."""

    return datetime.now(tz=UTC)


def card_date(ts: datetime) -> str:
    """Human date as printed on the card: ``October 19``.

    Aware timestamps are shown in the server's local time zone.
    """

    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return f"{ts:%B} {ts.day}"


def unix_window(end: datetime, *, days: int) -> tuple[int, int]:
    """(start, end) unix seconds for a window of ``days`` ending at ``end``."""

    end_s = int(end.timestamp())
    return end_s - days * 24 * 60 * 60, end_s
