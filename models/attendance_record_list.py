# models/attendance_record_list.py

"""
The ordered attendance records of a `Lesson`, one per occurrence.

Index `i` holds the `AttendanceRecord` for week `i + 1`. The length is fixed when the list is
built and always matches the owning lesson's number of occurrences.

Edits return a new list in which only the changed index holds a new record. Untouched records
are shared with the source list; records are immutable, so sharing them can never let an edit
on one version leak into another.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from core.exceptions import ConstraintViolationError, WeekOutOfRangeError
from core.response import ErrorCode
from core.utils import require_list
from models.attendance import Attendance
from models.attendance_record import AttendanceRecord
from models.week import Week


class AttendanceRecordList:

    def __init__(self, records: Iterable[AttendanceRecord]):
        records = tuple(records)

        for record in records:
            if not isinstance(record, AttendanceRecord):
                raise ConstraintViolationError(
                    f"Invalid attendance record: {record!r}.",
                    ErrorCode.INVALID_FIELD_VALUE,
                )

        self._records: tuple[AttendanceRecord, ...] = records

    @classmethod
    def empty(cls, number_of_occurrences: int) -> AttendanceRecordList:
        # a single empty record can be shared by every week
        return cls((AttendanceRecord(),) * number_of_occurrences)

    # === properties ===

    @property
    def records(self) -> list[AttendanceRecord]:
        return list(self._records)

    # === data accessors ===

    def is_week_contained(self, week: Week) -> bool:
        return week.zero_based_index < len(self._records)

    def record_at(self, week: Week) -> AttendanceRecord:
        self._require_week_contained(week)
        return self._records[week.zero_based_index]

    def attendance_of(self, student_id: str, week: Week) -> Attendance:
        return self.record_at(week).attendance_of(student_id)

    def attendances_of(self, student_id: str) -> list[Attendance | None]:
        """
        Summarizes a student's attendance across every week, in week order.

        Returns:
            list[Attendance | None]: One entry per occurrence; None where the student has no attendance recorded.
        """
        return [record.get(student_id) for record in self._records]

    # === data manipulators ===

    def with_record_at(self, week: Week, record: AttendanceRecord) -> AttendanceRecordList:
        self._require_week_contained(week)

        records = list(self._records)
        records[week.zero_based_index] = record
        return AttendanceRecordList(records)

    def without_student(self, student_id: str) -> AttendanceRecordList:
        return AttendanceRecordList(record.without(student_id) for record in self._records)

    def without_all_students(self) -> AttendanceRecordList:
        return AttendanceRecordList(record.without_all() for record in self._records)

    def resized(self, number_of_occurrences: int) -> AttendanceRecordList:
        """
        Returns a list of the given length, keeping existing records for weeks that still exist.

        Weeks beyond the new length are dropped; new weeks start with empty records.
        """
        kept = self._records[:number_of_occurrences]
        padding = (AttendanceRecord(),) * (number_of_occurrences - len(kept))
        return AttendanceRecordList(kept + padding)

    # === persistence and import ===

    def to_dict(self) -> list:
        return [record.to_dict() for record in self._records]

    @classmethod
    def from_dict(cls, data: list) -> AttendanceRecordList:
        data = require_list(data, "attendance record list")
        return cls(AttendanceRecord.from_dict(record) for record in data)

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttendanceRecordList):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AttendanceRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"AttendanceRecordList({list(self._records)!r})"

    # === helper methods ===

    def _require_week_contained(self, week: Week) -> None:
        if not self.is_week_contained(week):
            raise WeekOutOfRangeError(
                f"Week {week} is out of range: the lesson has {len(self._records)} occurrence(s)."
            )
