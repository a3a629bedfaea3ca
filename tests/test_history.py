"""Tests for log history display helpers."""

from datetime import datetime

from emotionagotchi.history import format_timestamp, newest_first
from emotionagotchi.models import MAX_TIMESTAMP, EmotionLog


def _ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _log(id: str, timestamp: int, action: str = "expressed") -> EmotionLog:
    return EmotionLog(id=id, text=f"entry {id}", action=action, timestamp=timestamp)


# ── Ordering ────────────────────────────────────────────────


def test_newest_first():
    logs = [_log("a", 100), _log("b", 300), _log("c", 200)]
    assert [log.id for log in newest_first(logs)] == ["b", "c", "a"]


def test_newest_first_ties_keep_stored_order():
    logs = [_log("a", 100), _log("b", 100)]
    assert [log.id for log in newest_first(logs)] == ["a", "b"]


def test_newest_first_does_not_mutate_input():
    logs = [_log("a", 100), _log("b", 300)]
    newest_first(logs)
    assert [log.id for log in logs] == ["a", "b"]


# ── Timestamps ──────────────────────────────────────────────

NOW = datetime(2026, 10, 18, 18, 30)


def test_format_today():
    assert format_timestamp(_ms(datetime(2026, 10, 18, 15, 4)), now=NOW) == "Today, 3:04 PM"


def test_format_yesterday():
    assert format_timestamp(_ms(datetime(2026, 10, 17, 9, 15)), now=NOW) == "Yesterday, 9:15 AM"


def test_format_same_year():
    assert format_timestamp(_ms(datetime(2026, 3, 4, 0, 5)), now=NOW) == "Mar 4, 12:05 AM"


def test_format_other_year():
    assert format_timestamp(_ms(datetime(2024, 12, 25, 12, 0)), now=NOW) == "Dec 25, 2024, 12:00 PM"


def test_format_yesterday_across_year_boundary():
    new_year = datetime(2027, 1, 1, 8, 0)
    assert format_timestamp(_ms(datetime(2026, 12, 31, 23, 59)), now=new_year) == "Yesterday, 11:59 PM"


def test_format_latest_storable_timestamp():
    latest = format_timestamp(MAX_TIMESTAMP, now=NOW)
    assert latest.startswith("Dec ")
    assert ", 9999, " in latest