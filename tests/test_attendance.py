# tests/test_attendance.py

import pytest

from core.exceptions import AttendanceNotFoundError, ConstraintViolationError
from core.response import ErrorCode
from models.attendance import Attendance
from models.attendance_record import AttendanceRecord
from models.week import Week

# --- attendance ---


def test_attendance_accepts_boundary_scores():
    assert Attendance(0).participation_score == 0
    assert Attendance(100).participation_score == 100


@pytest.mark.parametrize("score", [-1, 101, 50.0, "50", True, None])
def test_attendance_rejects_invalid_scores(score):
    with pytest.raises(ConstraintViolationError) as exc_info:
        Attendance(score)

    assert exc_info.value.error_code is ErrorCode.INVALID_PARTICIPATION_SCORE


def test_attendance_invalid_score_is_value_error():
    with pytest.raises(ValueError):
        Attendance(150)


def test_attendance_equality_is_structural():
    assert Attendance(80) == Attendance(80)
    assert Attendance(80) != Attendance(81)
    assert len({Attendance(80), Attendance(80)}) == 1


def test_attendance_from_dict():
    assert Attendance.from_dict({"participation_score": 42}) == Attendance(42)


# --- week ---


def test_week_zero_based_index():
    assert Week(1).zero_based_index == 0
    assert Week.from_zero_based(2) == Week(3)


@pytest.mark.parametrize("number", [0, -3, 1.5, True])
def test_week_rejects_invalid_numbers(number):
    with pytest.raises(ConstraintViolationError):
        Week(number)


# --- attendance record ---


def test_record_with_attendance_inserts_and_overwrites():
    record = AttendanceRecord()

    inserted = record.with_attendance("s001", Attendance(50))
    overwritten = inserted.with_attendance("s001", Attendance(90))

    assert inserted.attendance_of("s001") == Attendance(50)
    assert overwritten.attendance_of("s001") == Attendance(90)
    assert len(record) == 0


def test_record_attendance_of_missing_student():
    with pytest.raises(AttendanceNotFoundError):
        AttendanceRecord().attendance_of("s001")


def test_record_without_removes_entry():
    record = AttendanceRecord({"s001": Attendance(50), "s002": Attendance(60)})

    updated = record.without("s001")

    assert not updated.has_attendance("s001")
    assert updated.attendance_of("s002") == Attendance(60)
    assert record.has_attendance("s001")


def test_record_without_absent_student_is_noop():
    record = AttendanceRecord({"s001": Attendance(50)})
    assert record.without("s999") == record


def test_record_equality_is_structural():
    assert AttendanceRecord({"s001": Attendance(50)}) == AttendanceRecord(
        {"s001": Attendance(50)}
    )
    assert AttendanceRecord({"s001": Attendance(50)}) != AttendanceRecord(
        {"s001": Attendance(51)}
    )


def test_record_rejects_non_attendance_values():
    with pytest.raises(ConstraintViolationError):
        AttendanceRecord({"s001": 50})


def test_record_attendances_returns_copy():
    record = AttendanceRecord({"s001": Attendance(50)})

    attendances = record.attendances
    attendances["s002"] = Attendance(10)

    assert not record.has_attendance("s002")
