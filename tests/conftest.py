# tests/conftest.py

from datetime import time

import pytest

from models.attendance import Attendance
from models.attendance_record import AttendanceRecord
from models.attendance_record_list import AttendanceRecordList
from models.dataset import Dataset
from models.lesson import Day, Lesson
from models.module_class import ModuleClass
from models.student import Student
from models.week import Week

WEEK_1 = Week(1)
WEEK_2 = Week(2)
WEEK_3 = Week(3)


@pytest.fixture
def sample_student():
    return Student("s001", "Sean Cameron", "scameron@mmm.edu")


@pytest.fixture
def second_student():
    return Student("s002", "Paul Atreides", "patreides@mmm.edu")


@pytest.fixture
def unenrolled_student():
    return Student("s003", "Jessica Nerus", "jnerus@mmm.edu")


@pytest.fixture
def sample_record_list():
    return AttendanceRecordList(
        [
            AttendanceRecord({"s001": Attendance(50), "s002": Attendance(80)}),
            AttendanceRecord(),
            AttendanceRecord({"s002": Attendance(70)}),
        ]
    )


@pytest.fixture
def sample_lesson(sample_record_list):
    return Lesson(
        start_time=time(10, 0),
        end_time=time(12, 0),
        day=Day.MONDAY,
        number_of_occurrences=3,
        venue="COM1-0201",
        attendance_record_list=sample_record_list,
    )


@pytest.fixture
def second_lesson():
    return Lesson.create(time(14, 0), time(15, 0), Day.THURSDAY, 2, "COM1-0113")


@pytest.fixture
def sample_class(sample_lesson):
    return ModuleClass("CS2103T T01", {"s001", "s002"}, [sample_lesson])


@pytest.fixture
def sample_dataset(sample_student, second_student, unenrolled_student, sample_class):
    other_class = ModuleClass("CS2101 G05", {"s001"})
    return Dataset(
        [sample_student, second_student, unenrolled_student],
        [sample_class, other_class],
    )
