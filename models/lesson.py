# models/lesson.py

"""
Represents a recurring lesson of a class, such as a weekly tutorial.

A `Lesson` holds its schedule (day, start and end time, venue, and number of occurrences) and
owns the `AttendanceRecordList` with one record per occurrence.

Includes functionality for:
- Validating the schedule at construction time
- Replacing the attendance record list or schedule, returning a new `Lesson`
- Removing students from every week's attendance
- Serializing to and from JSON-compatible dictionaries

Notes:
- The number of occurrences and the length of the attendance record list always agree.
  `with_schedule()` resizes the list when the number of occurrences changes.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from core.exceptions import ConstraintViolationError, OccurrenceCountMismatchError
from core.formatters import format_time_range
from core.response import ErrorCode
from core.utils import require_dict, require_field
from models.attendance import Attendance
from models.attendance_record_list import AttendanceRecordList

MAX_OCCURRENCES = 52


class Day(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class Lesson:

    def __init__(
        self,
        start_time: datetime.time,
        end_time: datetime.time,
        day: Day,
        number_of_occurrences: int,
        venue: str,
        attendance_record_list: AttendanceRecordList,
    ):
        Lesson.validate_time_range(start_time, end_time)
        self._start_time = start_time
        self._end_time = end_time
        self._day = Lesson.validate_day_input(day)
        self._number_of_occurrences = Lesson.validate_occurrences_input(
            number_of_occurrences
        )
        self._venue = Lesson.validate_venue_input(venue)
        self._attendance_record_list = self._require_matching_length(
            attendance_record_list
        )

    @classmethod
    def create(
        cls,
        start_time: datetime.time,
        end_time: datetime.time,
        day: Day,
        number_of_occurrences: int,
        venue: str,
    ) -> Lesson:
        """Build a lesson with an empty attendance record for every occurrence."""
        number_of_occurrences = Lesson.validate_occurrences_input(number_of_occurrences)
        return cls(
            start_time,
            end_time,
            day,
            number_of_occurrences,
            venue,
            AttendanceRecordList.empty(number_of_occurrences),
        )

    # === properties ===

    @property
    def start_time(self) -> datetime.time:
        return self._start_time

    @property
    def end_time(self) -> datetime.time:
        return self._end_time

    @property
    def day(self) -> Day:
        return self._day

    @property
    def number_of_occurrences(self) -> int:
        return self._number_of_occurrences

    @property
    def venue(self) -> str:
        return self._venue

    @property
    def attendance_record_list(self) -> AttendanceRecordList:
        return self._attendance_record_list

    @property
    def student_ids(self) -> frozenset[str]:
        """Every student ID with attendance recorded in any week."""
        return frozenset().union(
            *(record.student_ids for record in self._attendance_record_list)
        )

    # === data accessors ===

    def is_same_lesson(self, other: Lesson) -> bool:
        return (
            self._day == other._day
            and self._start_time == other._start_time
            and self._end_time == other._end_time
            and self._venue.lower() == other._venue.lower()
        )

    def attendances_of(self, student_id: str) -> list[Attendance | None]:
        return self._attendance_record_list.attendances_of(student_id)

    # === data manipulators ===

    def with_attendance_record_list(
        self, attendance_record_list: AttendanceRecordList
    ) -> Lesson:
        return Lesson(
            self._start_time,
            self._end_time,
            self._day,
            self._number_of_occurrences,
            self._venue,
            attendance_record_list,
        )

    def with_schedule(
        self,
        start_time: datetime.time | None = None,
        end_time: datetime.time | None = None,
        day: Day | None = None,
        number_of_occurrences: int | None = None,
        venue: str | None = None,
    ) -> Lesson:
        """
        Returns a lesson with the given schedule fields replaced.

        Fields left as None keep their current values. If the number of occurrences changes, the
        attendance record list is resized to match: records for weeks that no longer exist are
        dropped, and new weeks start empty.

        Raises:
            ConstraintViolationError: If the resulting schedule is invalid.
        """
        if number_of_occurrences is None:
            number_of_occurrences = self._number_of_occurrences
        else:
            number_of_occurrences = Lesson.validate_occurrences_input(
                number_of_occurrences
            )

        attendance_record_list = self._attendance_record_list
        if number_of_occurrences != self._number_of_occurrences:
            attendance_record_list = attendance_record_list.resized(number_of_occurrences)

        return Lesson(
            start_time if start_time is not None else self._start_time,
            end_time if end_time is not None else self._end_time,
            day if day is not None else self._day,
            number_of_occurrences,
            venue if venue is not None else self._venue,
            attendance_record_list,
        )

    def without_student(self, student_id: str) -> Lesson:
        return self.with_attendance_record_list(
            self._attendance_record_list.without_student(student_id)
        )

    def without_all_students(self) -> Lesson:
        return self.with_attendance_record_list(
            self._attendance_record_list.without_all_students()
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "start_time": self._start_time.isoformat(timespec="minutes"),
            "end_time": self._end_time.isoformat(timespec="minutes"),
            "day": self._day.value,
            "number_of_occurrences": self._number_of_occurrences,
            "venue": self._venue,
            "attendance_record_list": self._attendance_record_list.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Lesson:
        data = require_dict(data, "lesson")
        raw_start_time = require_field(data, "start_time", "lesson")
        raw_end_time = require_field(data, "end_time", "lesson")
        raw_day = require_field(data, "day", "lesson")

        try:
            start_time = datetime.time.fromisoformat(raw_start_time)
            end_time = datetime.time.fromisoformat(raw_end_time)
            day = Day(raw_day)

        except (TypeError, ValueError) as e:
            raise ConstraintViolationError(
                f"Invalid lesson schedule: {e}", ErrorCode.INVALID_FIELD_VALUE
            ) from e

        return cls(
            start_time=start_time,
            end_time=end_time,
            day=day,
            number_of_occurrences=require_field(
                data, "number_of_occurrences", "lesson"
            ),
            venue=require_field(data, "venue", "lesson"),
            attendance_record_list=AttendanceRecordList.from_dict(
                require_field(data, "attendance_record_list", "lesson")
            ),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lesson):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"Lesson({self._day.value}, {self._start_time}, {self._end_time}, "
            f"{self._number_of_occurrences}, {self._venue})"
        )

    def __str__(self) -> str:
        return (
            f"LESSON: {self._day.value} {format_time_range(self._start_time, self._end_time)} "
            f"at {self._venue}, {self._number_of_occurrences} occurrence(s)"
        )

    # === data validators ===

    @staticmethod
    def validate_time_range(start_time: Any, end_time: Any) -> None:
        if not isinstance(start_time, datetime.time) or not isinstance(
            end_time, datetime.time
        ):
            raise ConstraintViolationError(
                "Invalid input. Start and end times must be times of day.",
                ErrorCode.INVALID_TIME_RANGE,
            )

        if start_time >= end_time:
            raise ConstraintViolationError(
                "Invalid input. Start time must be earlier than end time.",
                ErrorCode.INVALID_TIME_RANGE,
            )

    @staticmethod
    def validate_day_input(day: Any) -> Day:
        try:
            return Day(day)

        except ValueError:
            raise ConstraintViolationError(
                f"Invalid input. Unknown day: {day!r}.", ErrorCode.INVALID_FIELD_VALUE
            ) from None

    @staticmethod
    def validate_occurrences_input(number_of_occurrences: Any) -> int:
        if isinstance(number_of_occurrences, bool) or not isinstance(
            number_of_occurrences, int
        ):
            raise ConstraintViolationError(
                "Invalid input. Number of occurrences must be a whole number.",
                ErrorCode.INVALID_OCCURRENCE_COUNT,
            )

        if not 1 <= number_of_occurrences <= MAX_OCCURRENCES:
            raise ConstraintViolationError(
                f"Invalid input. Number of occurrences must be between 1 and {MAX_OCCURRENCES}.",
                ErrorCode.INVALID_OCCURRENCE_COUNT,
            )

        return number_of_occurrences

    @staticmethod
    def validate_venue_input(venue: Any) -> str:
        if not isinstance(venue, str) or not venue.strip():
            raise ConstraintViolationError(
                "Invalid input. Venue cannot be blank.", ErrorCode.INVALID_VENUE
            )
        return venue.strip()

    # === helper methods ===

    def _require_matching_length(
        self, attendance_record_list: AttendanceRecordList
    ) -> AttendanceRecordList:
        if not isinstance(attendance_record_list, AttendanceRecordList):
            raise ConstraintViolationError(
                "Invalid input. A lesson requires an attendance record list.",
                ErrorCode.MISSING_REQUIRED_FIELD,
            )

        if len(attendance_record_list) != self._number_of_occurrences:
            raise OccurrenceCountMismatchError(
                f"Expected {self._number_of_occurrences} attendance record(s), "
                f"got {len(attendance_record_list)}."
            )

        return attendance_record_list

    def _key(self) -> tuple:
        return (
            self._start_time,
            self._end_time,
            self._day,
            self._number_of_occurrences,
            self._venue,
            self._attendance_record_list,
        )
