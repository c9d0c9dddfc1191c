# core/exceptions.py

"""
Exceptions raised by model constructors and structural edits.

Every exception carries an `ErrorCode` so that operations can translate it into a failed
`Response` with `Response.from_exception()`. The five kind bases double as the matching
built-in exceptions (e.g. `ConstraintViolationError` is also a `ValueError`), so callers
that only care about the broad category can catch the built-in type.
"""

from __future__ import annotations

from typing import Any

from core.response import ErrorCode


class ClassbookError(Exception):
    """Base exception for all core errors."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred."

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}


# === error kinds ===


class IndexOutOfRangeError(ClassbookError, IndexError):
    """Raised when a positional selector falls outside its container."""


class NotFoundError(ClassbookError, LookupError):
    """Raised when a referenced entity does not exist."""

    error_code = ErrorCode.NOT_FOUND


class DuplicateError(ClassbookError):
    """Raised when an entity would be added twice."""


class ConstraintViolationError(ClassbookError, ValueError):
    """Raised when a value or entity would violate an invariant."""

    error_code = ErrorCode.INVALID_FIELD_VALUE


class HistoryBoundaryError(ClassbookError):
    """Raised when undo or redo moves past the ends of the history."""


# === index out of range ===


class WeekOutOfRangeError(IndexOutOfRangeError):
    error_code = ErrorCode.WEEK_OUT_OF_RANGE
    default_message = "The week is beyond the lesson's number of occurrences."


class LessonIndexOutOfRangeError(IndexOutOfRangeError):
    error_code = ErrorCode.INVALID_LESSON_INDEX
    default_message = "The lesson index provided is invalid."


class ClassIndexOutOfRangeError(IndexOutOfRangeError):
    error_code = ErrorCode.INVALID_CLASS_INDEX
    default_message = "The class index provided is invalid."


# === not found ===


class StudentNotFoundError(NotFoundError):
    error_code = ErrorCode.STUDENT_NOT_FOUND
    default_message = "The student could not be found."


class StudentNotInClassError(NotFoundError):
    error_code = ErrorCode.STUDENT_NOT_IN_CLASS
    default_message = "The student is not in the class roster."


class InvalidWeekError(NotFoundError):
    error_code = ErrorCode.INVALID_WEEK
    default_message = "The lesson has no occurrence in this week."


class AttendanceNotFoundError(NotFoundError):
    error_code = ErrorCode.ATTENDANCE_NOT_FOUND
    default_message = "The student has no attendance recorded for this week."


# === duplicates ===


class DuplicateAttendanceError(DuplicateError):
    error_code = ErrorCode.DUPLICATE_ATTENDANCE
    default_message = "The student already has attendance recorded for this week."


class DuplicateStudentError(DuplicateError):
    error_code = ErrorCode.DUPLICATE_STUDENT
    default_message = "This student already exists."


class DuplicateStudentInClassError(DuplicateError):
    error_code = ErrorCode.DUPLICATE_STUDENT_IN_CLASS
    default_message = "This student is already in the class roster."


class DuplicateClassError(DuplicateError):
    error_code = ErrorCode.DUPLICATE_CLASS
    default_message = "A class with this name already exists."


class DuplicateLessonError(DuplicateError):
    error_code = ErrorCode.DUPLICATE_LESSON
    default_message = "This lesson already exists in the class."


# === constraint violations ===


class OccurrenceCountMismatchError(ConstraintViolationError):
    error_code = ErrorCode.OCCURRENCE_COUNT_MISMATCH
    default_message = (
        "The attendance record list length must match the number of occurrences."
    )


# === history boundaries ===


class NoEarlierVersionError(HistoryBoundaryError):
    error_code = ErrorCode.NO_EARLIER_VERSION
    default_message = "There are no earlier versions to restore."


class NoLaterVersionError(HistoryBoundaryError):
    error_code = ErrorCode.NO_LATER_VERSION
    default_message = "There are no later versions to restore."
