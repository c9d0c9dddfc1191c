# tests/test_formatters.py

from datetime import time

from core.formatters import (
    format_attendance_summary,
    format_list_with_and,
    format_participation_score,
    format_time_range,
)


def test_format_list_with_and():
    assert format_list_with_and([]) == ""
    assert format_list_with_and(["Sean"]) == "Sean"
    assert format_list_with_and(["Sean", "Paul"]) == "Sean and Paul"
    assert format_list_with_and(["Sean", "Paul", "Jessica"]) == "Sean, Paul, and Jessica"


def test_format_time_range():
    assert format_time_range(time(9, 5), time(10, 0)) == "09:05-10:00"


def test_format_participation_score():
    assert format_participation_score(None) == "[NOT ATTENDED]"
    assert format_participation_score(0) == "0/100"


def test_format_attendance_summary():
    assert format_attendance_summary([None, 45]) == "Week 1: [NOT ATTENDED]\nWeek 2: 45/100"
