# tests/test_response.py

import pytest

from core.exceptions import (
    AttendanceNotFoundError,
    ClassIndexOutOfRangeError,
    DuplicateLessonError,
    NoLaterVersionError,
    OccurrenceCountMismatchError,
)
from core.response import ErrorCode, ErrorKind, Response


@pytest.mark.parametrize(
    "error, kind, status_code",
    [
        (ErrorCode.INVALID_CLASS_INDEX, ErrorKind.INDEX_OUT_OF_RANGE, 400),
        (ErrorCode.ATTENDANCE_NOT_FOUND, ErrorKind.NOT_FOUND, 404),
        (ErrorCode.DUPLICATE_ATTENDANCE, ErrorKind.DUPLICATE, 409),
        (ErrorCode.INVALID_PARTICIPATION_SCORE, ErrorKind.CONSTRAINT_VIOLATION, 400),
        (ErrorCode.NO_EARLIER_VERSION, ErrorKind.HISTORY_BOUNDARY, 400),
        (ErrorCode.INTERNAL_ERROR, ErrorKind.INTERNAL, 500),
    ],
)
def test_error_code_kind_and_status(error, kind, status_code):
    assert error.kind is kind
    assert error.status_code == status_code
    assert Response.fail(error=error).status_code == status_code


def test_succeed_defaults():
    response = Response.succeed(detail="ok")

    assert response.success
    assert response.status_code == 200
    assert response.error is None
    assert response.error_kind is None
    assert response.data == {}


def test_from_exception_uses_error_code():
    response = Response.from_exception(AttendanceNotFoundError("Nothing in week 2."))

    assert not response.success
    assert response.error is ErrorCode.ATTENDANCE_NOT_FOUND
    assert response.detail == "Nothing in week 2."
    assert response.status_code == 404


def test_from_exception_with_prefix_and_default_message():
    response = Response.from_exception(ClassIndexOutOfRangeError(), "Failed to edit")

    assert response.detail == "Failed to edit: The class index provided is invalid."


def test_from_exception_unexpected():
    response = Response.from_exception(KeyError("boom"))

    assert response.error is ErrorCode.INTERNAL_ERROR
    assert response.detail.startswith("Unexpected error:")


def test_exception_kinds_are_builtin_compatible():
    assert isinstance(ClassIndexOutOfRangeError(), IndexError)
    assert isinstance(AttendanceNotFoundError(), LookupError)
    assert isinstance(OccurrenceCountMismatchError(), ValueError)
    assert DuplicateLessonError().error_code.kind is ErrorKind.DUPLICATE
    assert NoLaterVersionError().error_code.kind is ErrorKind.HISTORY_BOUNDARY


def test_response_to_dict_and_str():
    response = Response.fail(detail="nope", error=ErrorCode.DUPLICATE_CLASS)

    assert response.to_dict() == {
        "success": False,
        "error": "DUPLICATE_CLASS",
        "detail": "nope",
        "status_code": 409,
    }
    assert str(response) == "Error: DUPLICATE_CLASS"
    assert str(Response.succeed(detail="done")) == "Success: done"
