"""Log history helpers for the display layer (ordering, readable timestamps)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from emotionagotchi.models import EmotionLog


def newest_first(logs: Iterable[EmotionLog]) -> list[EmotionLog]:
    """Sort by timestamp, newest first. Ties keep their stored order."""
    return sorted(logs, key=lambda log: log.timestamp, reverse=True)


def _time_of_day(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_timestamp(timestamp: int, now: datetime | None = None) -> str:
    """Readable local time for a log entry.

    "Today, 3:04 PM" / "Yesterday, 3:04 PM" / "Mar 4, 3:04 PM",
    with the year added when it is not the current one.
    """
    moment = datetime.fromtimestamp(timestamp / 1000)
    now = now or datetime.now()
    clock = _time_of_day(moment)

    if moment.date() == now.date():
        return f"Today, {clock}"
    if moment.date() == (now - timedelta(days=1)).date():
        return f"Yesterday, {clock}"

    day = f"{moment:%b} {moment.day}"
    if moment.year != now.year:
        day = f"{day}, {moment.year}"
    return f"{day}, {clock}"
