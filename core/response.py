# core/response.py

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    HISTORY_BOUNDARY = "HISTORY_BOUNDARY"
    INTERNAL = "INTERNAL"


class ErrorCode(Enum):
    # === Index Out Of Range ===
    INVALID_CLASS_INDEX = "INVALID_CLASS_INDEX"
    INVALID_LESSON_INDEX = "INVALID_LESSON_INDEX"
    WEEK_OUT_OF_RANGE = "WEEK_OUT_OF_RANGE"

    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    STUDENT_NOT_IN_CLASS = "STUDENT_NOT_IN_CLASS"
    ATTENDANCE_NOT_FOUND = "ATTENDANCE_NOT_FOUND"

    # the week exists as a number, but the lesson has no such occurrence
    INVALID_WEEK = "INVALID_WEEK"

    # === Duplicates ===
    DUPLICATE_ATTENDANCE = "DUPLICATE_ATTENDANCE"
    DUPLICATE_STUDENT = "DUPLICATE_STUDENT"
    DUPLICATE_STUDENT_IN_CLASS = "DUPLICATE_STUDENT_IN_CLASS"
    DUPLICATE_CLASS = "DUPLICATE_CLASS"
    DUPLICATE_LESSON = "DUPLICATE_LESSON"

    # === Constraint Violations ===
    INVALID_PARTICIPATION_SCORE = "INVALID_PARTICIPATION_SCORE"
    INVALID_WEEK_NUMBER = "INVALID_WEEK_NUMBER"
    INVALID_OCCURRENCE_COUNT = "INVALID_OCCURRENCE_COUNT"
    OCCURRENCE_COUNT_MISMATCH = "OCCURRENCE_COUNT_MISMATCH"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    INVALID_NAME = "INVALID_NAME"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_VENUE = "INVALID_VENUE"
    INVALID_REFERENCE = "INVALID_REFERENCE"

    # required argument or attribute is missing
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # field value is out of bounds or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # an edit descriptor that changes nothing
    NO_FIELDS_EDITED = "NO_FIELDS_EDITED"

    # === History Boundaries ===
    NO_EARLIER_VERSION = "NO_EARLIER_VERSION"
    NO_LATER_VERSION = "NO_LATER_VERSION"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def kind(self) -> ErrorKind:
        return _ERROR_KINDS.get(self, ErrorKind.CONSTRAINT_VIOLATION)

    @property
    def status_code(self) -> int:
        return _KIND_STATUS_CODES.get(self.kind, 400)


_ERROR_KINDS: dict[ErrorCode, ErrorKind] = {
    ErrorCode.INVALID_CLASS_INDEX: ErrorKind.INDEX_OUT_OF_RANGE,
    ErrorCode.INVALID_LESSON_INDEX: ErrorKind.INDEX_OUT_OF_RANGE,
    ErrorCode.WEEK_OUT_OF_RANGE: ErrorKind.INDEX_OUT_OF_RANGE,
    ErrorCode.NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.STUDENT_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.STUDENT_NOT_IN_CLASS: ErrorKind.NOT_FOUND,
    ErrorCode.ATTENDANCE_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.INVALID_WEEK: ErrorKind.NOT_FOUND,
    ErrorCode.DUPLICATE_ATTENDANCE: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_STUDENT: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_STUDENT_IN_CLASS: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_CLASS: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_LESSON: ErrorKind.DUPLICATE,
    ErrorCode.NO_EARLIER_VERSION: ErrorKind.HISTORY_BOUNDARY,
    ErrorCode.NO_LATER_VERSION: ErrorKind.HISTORY_BOUNDARY,
    ErrorCode.INTERNAL_ERROR: ErrorKind.INTERNAL,
}

_KIND_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE: 409,
    ErrorKind.INTERNAL: 500,
}


class Response:
    """
    Standard Response object for edit operations, lookups, and history transitions.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style response code.
        data (dict): Optional payload, varies by operation.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def error_kind(self) -> ErrorKind | None:
        return self._error.kind if isinstance(self._error, ErrorCode) else None

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data or {}

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            error=None,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ) -> Response:
        if status_code is None:
            status_code = error.status_code if isinstance(error, ErrorCode) else 400

        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def from_exception(cls, exc: Exception, detail_prefix: str | None = None) -> Response:
        """
        Converts a raised exception into a failed `Response`.

        Args:
            exc (Exception): The exception caught by an operation.
            detail_prefix (str | None): Optional context prepended to the exception message.

        Returns:
            Response: A failure carrying the exception's `error_code` if it has one, otherwise `ErrorCode.INTERNAL_ERROR`.
        """
        error = getattr(exc, "error_code", None)
        message = getattr(exc, "message", None) or str(exc)

        if not isinstance(error, ErrorCode):
            error = ErrorCode.INTERNAL_ERROR
            message = f"Unexpected error: {message}"

        detail = f"{detail_prefix}: {message}" if detail_prefix else message

        return cls.fail(detail=detail, error=error)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error.value if isinstance(self.error, Enum) else self.error,
            "detail": self.detail,
            "status_code": self.status_code,
        }

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Response({self._success}, {self._error}, {self._detail!r})"

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        else:
            error_str = (
                self.error.value if isinstance(self.error, Enum) else self.error or ""
            )
            return f"Error: {error_str}"
