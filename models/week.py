# models/week.py

"""
Represents one week of a lesson's schedule.

Weeks are presented to users as one-based numbers (week 1 is the first occurrence of a lesson)
and used internally as zero-based indexes into an `AttendanceRecordList`.
"""

from __future__ import annotations

from typing import Any

from core.exceptions import ConstraintViolationError
from core.response import ErrorCode


class Week:

    def __init__(self, number: int):
        self._number = Week.validate_week_input(number)

    @property
    def number(self) -> int:
        return self._number

    @property
    def zero_based_index(self) -> int:
        return self._number - 1

    @classmethod
    def from_zero_based(cls, index: int) -> Week:
        return cls(index + 1)

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Week):
            return NotImplemented
        return self._number == other._number

    def __hash__(self) -> int:
        return hash(("Week", self._number))

    def __lt__(self, other: Week) -> bool:
        return self._number < other._number

    def __repr__(self) -> str:
        return f"Week({self._number})"

    def __str__(self) -> str:
        return str(self._number)

    # === data validators ===

    @staticmethod
    def validate_week_input(number: Any) -> int:
        """
        Validates a one-based week number.

        Raises:
            ConstraintViolationError: If the input is not an integer or is less than one.
        """
        if isinstance(number, bool) or not isinstance(number, int):
            raise ConstraintViolationError(
                "Invalid input. Week number must be a whole number.",
                ErrorCode.INVALID_WEEK_NUMBER,
            )

        if number < 1:
            raise ConstraintViolationError(
                "Invalid input. Week number must be at least 1.",
                ErrorCode.INVALID_WEEK_NUMBER,
            )

        return number
