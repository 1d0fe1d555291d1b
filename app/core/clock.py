"""HH:MM clock helpers shared by the skeleton and plan timelines."""

from __future__ import annotations

MINUTES_PER_DAY = 1440


def parse_hhmm(value: str) -> int:
    """Parse ``HH:MM`` into minutes since midnight.

    Callers validate the format upstream; missing parts count as zero.
    """
    parts = str(value).strip().split(":")
    hour = int(parts[0]) if parts and parts[0] else 0
    minute = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    return hour * 60 + minute


def format_hhmm(total_minutes: int) -> str:
    """Format minutes as ``HH:MM`` on a 24h clock, wrapping past midnight."""
    normalized = int(total_minutes) % MINUTES_PER_DAY
    return f"{normalized // 60:02d}:{normalized % 60:02d}"


def window_minutes(start: str, end: str) -> int:
    """Length of the ``start`` to ``end`` window; the end may wrap past midnight."""
    return (parse_hhmm(end) - parse_hhmm(start)) % MINUTES_PER_DAY
