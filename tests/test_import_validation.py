# tests/test_import_validation.py

import pytest

from core.exceptions import ConstraintViolationError
from core.response import ErrorCode
from models.attendance import Attendance
from models.attendance_record import AttendanceRecord
from models.attendance_record_list import AttendanceRecordList
from models.dataset import Dataset
from models.lesson import Lesson
from models.module_class import ModuleClass
from models.student import Student


@pytest.fixture
def lesson_data():
    return {
        "start_time": "10:00",
        "end_time": "12:00",
        "day": "Monday",
        "number_of_occurrences": 2,
        "venue": "COM1-0201",
        "attendance_record_list": [{"s001": {"participation_score": 50}}, {}],
    }


@pytest.mark.parametrize(
    "model, data, expected",
    [
        (Attendance, {}, ErrorCode.MISSING_REQUIRED_FIELD),
        (Attendance, 50, ErrorCode.INVALID_FIELD_VALUE),
        (Attendance, {"participation_score": "50"}, ErrorCode.INVALID_PARTICIPATION_SCORE),
        (Student, {"id": "s001", "name": "Sean Cameron"}, ErrorCode.MISSING_REQUIRED_FIELD),
        (Student, ["s001", "Sean Cameron", "scameron@mmm.edu"], ErrorCode.INVALID_FIELD_VALUE),
        (Student, {"id": 1, "name": "Sean Cameron", "email": "scameron@mmm.edu"}, ErrorCode.MISSING_REQUIRED_FIELD),
        (AttendanceRecord, [{"participation_score": 50}], ErrorCode.INVALID_FIELD_VALUE),
        (AttendanceRecord, {"s001": 50}, ErrorCode.INVALID_FIELD_VALUE),
        (AttendanceRecord, {"s001": {}}, ErrorCode.MISSING_REQUIRED_FIELD),
        (AttendanceRecordList, {"s001": {"participation_score": 50}}, ErrorCode.INVALID_FIELD_VALUE),
        (AttendanceRecordList, [[]], ErrorCode.INVALID_FIELD_VALUE),
        (ModuleClass, {"student_ids": ["s001"]}, ErrorCode.MISSING_REQUIRED_FIELD),
        (ModuleClass, {"name": "C", "lessons": {}}, ErrorCode.INVALID_FIELD_VALUE),
        (ModuleClass, {"name": "C", "student_ids": [["s001"]]}, ErrorCode.INVALID_FIELD_VALUE),
        (Dataset, [], ErrorCode.INVALID_FIELD_VALUE),
        (Dataset, {"students": {"s001": {}}}, ErrorCode.INVALID_FIELD_VALUE),
        (Dataset, {"classes": [{"student_ids": []}]}, ErrorCode.MISSING_REQUIRED_FIELD),
    ],
)
def test_from_dict_rejects_malformed_data(model, data, expected):
    with pytest.raises(ConstraintViolationError) as exc_info:
        model.from_dict(data)

    assert exc_info.value.error_code is expected


@pytest.mark.parametrize(
    "key", ["start_time", "end_time", "day", "number_of_occurrences", "venue", "attendance_record_list"]
)
def test_lesson_from_dict_missing_field(lesson_data, key):
    del lesson_data[key]

    with pytest.raises(ConstraintViolationError) as exc_info:
        Lesson.from_dict(lesson_data)

    assert exc_info.value.error_code is ErrorCode.MISSING_REQUIRED_FIELD


@pytest.mark.parametrize(
    "key, value",
    [
        ("start_time", 930),
        ("end_time", "noon"),
        ("day", 1),
        ("number_of_occurrences", "2"),
        ("venue", None),
        ("attendance_record_list", {}),
    ],
)
def test_lesson_from_dict_wrong_type(lesson_data, key, value):
    lesson_data[key] = value

    with pytest.raises(ConstraintViolationError):
        Lesson.from_dict(lesson_data)


def test_lesson_from_dict_accepts_valid_data(lesson_data):
    lesson = Lesson.from_dict(lesson_data)

    assert lesson.attendances_of("s001") == [Attendance(50), None]


def test_roster_given_as_string_is_rejected():
    with pytest.raises(ConstraintViolationError) as exc_info:
        ModuleClass.from_dict({"name": "C", "student_ids": "s001", "lessons": []})

    assert exc_info.value.error_code is ErrorCode.INVALID_FIELD_VALUE

    with pytest.raises(ConstraintViolationError):
        ModuleClass("C", "s001")
