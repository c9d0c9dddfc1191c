# tests/test_student.py

import pytest

from core.exceptions import ConstraintViolationError
from models.student import Student


def test_student_to_dict(sample_student):
    data = sample_student.to_dict()

    assert data["id"] == "s001"
    assert data["name"] == "Sean Cameron"
    assert data["email"] == "scameron@mmm.edu"


def test_student_from_dict():
    student = Student.from_dict(
        {
            "id": "s001",
            "name": "Sean Cameron",
            "email": "SCameron@MMM.edu ",
        }
    )

    assert student.id == "s001"
    assert student.name == "Sean Cameron"
    assert student.email == "scameron@mmm.edu"


def test_student_to_str(sample_student):
    assert (
        str(sample_student)
        == "STUDENT: name: Sean Cameron, email: scameron@mmm.edu, id: s001"
    )


def test_student_create_generates_id():
    first = Student.create("Sean Cameron", "scameron@mmm.edu")
    second = Student.create("Sean Cameron", "scameron@mmm.edu")

    assert first.id != second.id


def test_student_replace_keeps_id(sample_student):
    edited = sample_student.replace(name="Paul Atreides")

    assert edited.id == sample_student.id
    assert edited.name == "Paul Atreides"
    assert edited.email == sample_student.email
    assert sample_student.name == "Sean Cameron"


@pytest.mark.parametrize("email", ["nope", "a@b", "a @b.com", "a@@b.com"])
def test_invalid_email(email):
    with pytest.raises(ConstraintViolationError):
        Student("s001", "Sean Cameron", email)


def test_blank_name():
    with pytest.raises(ConstraintViolationError):
        Student("s001", " ", "scameron@mmm.edu")
