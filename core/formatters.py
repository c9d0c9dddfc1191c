# core/formatters.py

# all pure utilities & time helpers
# must never import from models!

import datetime
from typing import Any

# === generic text formatters ===


def format_list_with_and(items: list[Any]) -> str:
    items = [str(item) for item in items]

    if not items:
        return ""

    if len(items) == 1:
        return items[0]

    if len(items) == 2:
        return " and ".join(items)

    return ", ".join(items[:-1]) + ", and " + items[-1]


# === schedule formatters ===


def format_time(value: datetime.time) -> str:
    return value.strftime("%H:%M")


def format_time_range(start_time: datetime.time, end_time: datetime.time) -> str:
    return f"{format_time(start_time)}-{format_time(end_time)}"


# === attendance formatters ===


def format_participation_score(score: int | None) -> str:
    return "[NOT ATTENDED]" if score is None else f"{score}/100"


def format_attendance_summary(scores: list[int | None]) -> str:
    """Render one line per week, e.g. "Week 1: 80/100"."""
    return "\n".join(
        f"Week {week}: {format_participation_score(score)}"
        for week, score in enumerate(scores, start=1)
    )
