# models/attendance_record.py

"""
Represents the attendance taken for one occurrence (week) of a lesson.

An `AttendanceRecord` maps student IDs to `Attendance` values. Students without an entry did
not attend that week. Records are immutable: every manipulator returns a new record and leaves
the source untouched.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from core.exceptions import AttendanceNotFoundError, ConstraintViolationError
from core.response import ErrorCode
from core.utils import require_dict
from models.attendance import Attendance


class AttendanceRecord:

    def __init__(self, attendances: Mapping[str, Attendance] | None = None):
        attendances = dict(attendances or {})

        for student_id, attendance in attendances.items():
            if not isinstance(student_id, str) or not student_id.strip():
                raise ConstraintViolationError(
                    f"Invalid student ID in attendance record: {student_id!r}.",
                    ErrorCode.INVALID_FIELD_VALUE,
                )
            if not isinstance(attendance, Attendance):
                raise ConstraintViolationError(
                    f"Invalid attendance entry for student {student_id}: {attendance!r}.",
                    ErrorCode.INVALID_FIELD_VALUE,
                )

        self._attendances: dict[str, Attendance] = attendances

    # === properties ===

    @property
    def attendances(self) -> dict[str, Attendance]:
        return self._attendances.copy()

    @property
    def student_ids(self) -> frozenset[str]:
        return frozenset(self._attendances)

    # === data accessors ===

    def has_attendance(self, student_id: str) -> bool:
        return student_id in self._attendances

    def attendance_of(self, student_id: str) -> Attendance:
        try:
            return self._attendances[student_id]

        except KeyError:
            raise AttendanceNotFoundError(
                f"No attendance recorded for student {student_id}."
            ) from None

    def get(self, student_id: str) -> Attendance | None:
        return self._attendances.get(student_id)

    # === data manipulators ===

    def with_attendance(self, student_id: str, attendance: Attendance) -> AttendanceRecord:
        """Return a record with `attendance` inserted for the student, overwriting any existing entry."""
        attendances = self._attendances.copy()
        attendances[student_id] = attendance
        return AttendanceRecord(attendances)

    def without(self, student_id: str) -> AttendanceRecord:
        if student_id not in self._attendances:
            return self

        attendances = self._attendances.copy()
        del attendances[student_id]
        return AttendanceRecord(attendances)

    def without_all(self) -> AttendanceRecord:
        return self if not self._attendances else AttendanceRecord()

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            student_id: attendance.to_dict()
            for student_id, attendance in self._attendances.items()
        }

    @classmethod
    def from_dict(cls, data: dict) -> AttendanceRecord:
        data = require_dict(data, "attendance record")
        return cls(
            {
                student_id: Attendance.from_dict(attendance)
                for student_id, attendance in data.items()
            }
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttendanceRecord):
            return NotImplemented
        return self._attendances == other._attendances

    def __hash__(self) -> int:
        return hash(frozenset(self._attendances.items()))

    def __len__(self) -> int:
        return len(self._attendances)

    def __iter__(self) -> Iterator[str]:
        return iter(self._attendances)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._attendances

    def __repr__(self) -> str:
        return f"AttendanceRecord({self._attendances!r})"
