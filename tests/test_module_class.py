# tests/test_module_class.py

from datetime import time

import pytest

from core.exceptions import (
    ConstraintViolationError,
    DuplicateLessonError,
    DuplicateStudentInClassError,
    LessonIndexOutOfRangeError,
)
from models.attendance import Attendance
from models.attendance_record import AttendanceRecord
from models.attendance_record_list import AttendanceRecordList
from models.lesson import Day, Lesson
from models.module_class import ModuleClass


def test_attendance_must_reference_roster(sample_lesson):
    with pytest.raises(ConstraintViolationError):
        ModuleClass("CS2103T T01", {"s001"}, [sample_lesson])


def test_duplicate_lessons_rejected(sample_lesson):
    clone = Lesson.create(time(10, 0), time(12, 0), Day.MONDAY, 5, "com1-0201")

    with pytest.raises(DuplicateLessonError):
        ModuleClass("CS2103T T01", {"s001", "s002"}, [sample_lesson, clone])


def test_lesson_at_out_of_range(sample_class):
    with pytest.raises(LessonIndexOutOfRangeError):
        sample_class.lesson_at(1)

    with pytest.raises(LessonIndexOutOfRangeError):
        sample_class.lesson_at(-1)


def test_with_lesson_at_replaces_single_lesson(sample_class, second_lesson):
    module_class = sample_class.with_lesson(second_lesson)
    replacement = second_lesson.with_schedule(venue="COM1-0114")

    updated = module_class.with_lesson_at(1, replacement)

    assert updated.lesson_at(1) == replacement
    assert updated.lesson_at(0) is module_class.lesson_at(0)
    assert updated.name == module_class.name
    assert updated.student_ids == module_class.student_ids
    assert module_class.lesson_at(1) == second_lesson


def test_with_lesson_at_out_of_range(sample_class, second_lesson):
    with pytest.raises(LessonIndexOutOfRangeError):
        sample_class.with_lesson_at(3, second_lesson)


def test_with_student_duplicate(sample_class):
    with pytest.raises(DuplicateStudentInClassError):
        sample_class.with_student("s001")

    assert sample_class.with_student("s003").has_student("s003")


def test_without_student_cascades(sample_class):
    updated = sample_class.without_student("s002")

    assert not updated.has_student("s002")
    for lesson in updated.lessons:
        for record in lesson.attendance_record_list:
            assert not record.has_attendance("s002")

    assert updated.lesson_at(0).attendances_of("s001") == [Attendance(50), None, None]
    assert sample_class.has_student("s002")


def test_without_student_is_idempotent(sample_class):
    once = sample_class.without_student("s001")
    twice = once.without_student("s001")

    assert once == twice


def test_without_absent_student_is_noop(sample_class):
    assert sample_class.without_student("s999") == sample_class


def test_without_all_students(sample_class):
    updated = sample_class.without_all_students()

    assert updated.student_ids == frozenset()
    assert updated.lesson_at(0).student_ids == frozenset()
    assert updated.lesson_at(0).number_of_occurrences == 3


def test_without_lesson_at(sample_class, second_lesson):
    module_class = sample_class.with_lesson(second_lesson)

    updated = module_class.without_lesson_at(0)

    assert updated.lessons == [second_lesson]


def test_replacing_lesson_with_stranger_attendance_fails(sample_class):
    stranger_list = AttendanceRecordList(
        [AttendanceRecord({"s999": Attendance(10)}), AttendanceRecord(), AttendanceRecord()]
    )
    lesson = sample_class.lesson_at(0).with_attendance_record_list(stranger_list)

    with pytest.raises(ConstraintViolationError):
        sample_class.with_lesson_at(0, lesson)


def test_blank_name_rejected():
    with pytest.raises(ConstraintViolationError):
        ModuleClass("  ")
