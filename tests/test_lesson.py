# tests/test_lesson.py

from datetime import time

import pytest

from core.exceptions import ConstraintViolationError, OccurrenceCountMismatchError
from core.response import ErrorCode, ErrorKind
from models.attendance import Attendance
from models.attendance_record_list import AttendanceRecordList
from models.lesson import Day, Lesson
from models.week import Week


def test_create_builds_matching_record_list():
    lesson = Lesson.create(time(9, 0), time(10, 0), Day.FRIDAY, 13, "LT19")

    assert lesson.number_of_occurrences == 13
    assert len(lesson.attendance_record_list) == 13


def test_start_must_precede_end():
    with pytest.raises(ConstraintViolationError) as exc_info:
        Lesson.create(time(10, 0), time(10, 0), Day.MONDAY, 1, "LT19")

    assert exc_info.value.error_code is ErrorCode.INVALID_TIME_RANGE


@pytest.mark.parametrize("occurrences", [0, 53, "3"])
def test_invalid_occurrences(occurrences):
    with pytest.raises(ConstraintViolationError):
        Lesson.create(time(9, 0), time(10, 0), Day.MONDAY, occurrences, "LT19")


def test_blank_venue_rejected():
    with pytest.raises(ConstraintViolationError):
        Lesson.create(time(9, 0), time(10, 0), Day.MONDAY, 1, "   ")


def test_unknown_day_rejected():
    with pytest.raises(ConstraintViolationError):
        Lesson.create(time(9, 0), time(10, 0), "Someday", 1, "LT19")


def test_with_attendance_record_list_requires_matching_length(sample_lesson):
    with pytest.raises(OccurrenceCountMismatchError) as exc_info:
        sample_lesson.with_attendance_record_list(AttendanceRecordList.empty(2))

    assert exc_info.value.error_code.kind is ErrorKind.CONSTRAINT_VIOLATION


def test_with_attendance_record_list_copies_schedule(sample_lesson):
    updated = sample_lesson.with_attendance_record_list(AttendanceRecordList.empty(3))

    assert updated.day is Day.MONDAY
    assert updated.start_time == time(10, 0)
    assert updated.venue == "COM1-0201"
    assert updated.attendances_of("s001") == [None, None, None]
    assert sample_lesson.attendances_of("s001") == [Attendance(50), None, None]


def test_with_schedule_resizes_attendance(sample_lesson):
    updated = sample_lesson.with_schedule(number_of_occurrences=2, venue="COM2-0108")

    assert updated.number_of_occurrences == 2
    assert updated.venue == "COM2-0108"
    assert updated.attendances_of("s002") == [Attendance(80), None]
    assert sample_lesson.number_of_occurrences == 3


def test_without_student(sample_lesson):
    updated = sample_lesson.without_student("s001")

    assert "s001" not in updated.student_ids
    assert updated.attendance_record_list.attendance_of("s002", Week(1)) == Attendance(80)


def test_is_same_lesson_ignores_attendance(sample_lesson):
    clone = sample_lesson.with_attendance_record_list(AttendanceRecordList.empty(3))

    assert sample_lesson.is_same_lesson(clone)
    assert sample_lesson != clone


def test_lesson_dict_round_trip(sample_lesson):
    assert Lesson.from_dict(sample_lesson.to_dict()) == sample_lesson
