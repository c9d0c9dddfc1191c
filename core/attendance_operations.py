# core/attendance_operations.py

"""
Edit operations for attendance.

Every operation takes a `Dataset` plus fully-resolved arguments (zero-based class and lesson
indexes, a student ID, and a `Week`) and returns a `Response`. On success `data["dataset"]` holds
the new `Dataset`; on failure the `Response` carries a typed `ErrorCode` and the input dataset is
untouched, since all checks run before anything is built and every entity is immutable.

An edit rebuilds only the path from the changed attendance up to the root:
    AttendanceRecord -> AttendanceRecordList -> Lesson -> ModuleClass -> Dataset
Everything off that path is shared with the source dataset.
"""

from __future__ import annotations

from typing import NamedTuple

from core.app_logging import get_logger
from core.exceptions import (
    ClassbookError,
    DuplicateAttendanceError,
    InvalidWeekError,
    StudentNotInClassError,
)
from core.formatters import format_attendance_summary, format_list_with_and
from core.response import Response
from models.attendance import Attendance
from models.attendance_record import AttendanceRecord
from models.attendance_record_list import AttendanceRecordList
from models.dataset import Dataset
from models.lesson import Lesson
from models.module_class import ModuleClass
from models.week import Week

logger = get_logger(__name__)


class EditAttendanceDescriptor:
    """
    Stores the details to edit an attendance with.

    Each field left as None keeps the attendance's current value. Whether an all-empty descriptor
    is acceptable is the caller's decision; see `is_any_field_edited()`.
    """

    def __init__(self, participation_score: int | None = None):
        if participation_score is not None:
            Attendance.validate_participation_score_input(participation_score)
        self._participation_score = participation_score

    @property
    def participation_score(self) -> int | None:
        return self._participation_score

    def is_any_field_edited(self) -> bool:
        return self._participation_score is not None

    def apply(self, attendance: Attendance) -> Attendance:
        if self._participation_score is None:
            return Attendance(attendance.participation_score)
        return Attendance(self._participation_score)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditAttendanceDescriptor):
            return NotImplemented
        return self._participation_score == other._participation_score

    def __repr__(self) -> str:
        return f"EditAttendanceDescriptor({self._participation_score})"


class _AttendanceTarget(NamedTuple):
    module_class: ModuleClass
    lesson: Lesson
    record_list: AttendanceRecordList
    record: AttendanceRecord


# === read operations ===


def get_attendance(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    student_id: str,
    week: Week,
) -> Response:
    """
    Looks up a student's attendance in one week of a lesson.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True if the attendance exists.
            - error (ErrorCode | None):
                - `ErrorCode.INVALID_CLASS_INDEX` / `ErrorCode.INVALID_LESSON_INDEX` for bad indexes.
                - `ErrorCode.STUDENT_NOT_IN_CLASS` if the student is not on the roster.
                - `ErrorCode.INVALID_WEEK` if the lesson has no such week.
                - `ErrorCode.ATTENDANCE_NOT_FOUND` if nothing was recorded.
            - data (dict | None):
                - On success: "attendance" (Attendance).

    Notes:
        - This method is read-only and does not raise.
    """
    try:
        target = _resolve_target(dataset, class_index, lesson_index, student_id, week)
        attendance = target.record.attendance_of(student_id)

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to get attendance")

    return Response.succeed(data={"attendance": attendance})


def list_attendances(
    dataset: Dataset, class_index: int, lesson_index: int, student_id: str
) -> Response:
    """
    Lists a student's attendance across every week of a lesson.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True if the class, lesson, and roster checks pass.
            - detail (str | None): On success, one line per week, e.g. "Week 2: [NOT ATTENDED]".
            - error (ErrorCode | None): `INVALID_CLASS_INDEX`, `INVALID_LESSON_INDEX`, or `STUDENT_NOT_IN_CLASS`.
            - data (dict | None):
                - On success: "attendances" (list[Attendance | None]), in week order.
    """
    try:
        module_class = dataset.class_at(class_index)
        lesson = module_class.lesson_at(lesson_index)

        if not module_class.has_student(student_id):
            raise StudentNotInClassError(
                f"Student {student_id} is not in class {module_class.name}."
            )

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to list attendance")

    attendances = lesson.attendances_of(student_id)
    summary = format_attendance_summary(
        [a.participation_score if a is not None else None for a in attendances]
    )

    return Response.succeed(
        detail=summary,
        data={
            "attendances": attendances,
        },
    )


# === data manipulators ===


def add_attendance(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    student_id: str,
    week: Week,
    attendance: Attendance,
) -> Response:
    """
    Records a new attendance for a student in one week of a lesson.

    Args:
        dataset (Dataset): The current dataset.
        class_index (int): Zero-based index of the class in `dataset.classes`.
        lesson_index (int): Zero-based index of the lesson in the class.
        student_id (str): The student's unique ID.
        week (Week): The week of the occurrence.
        attendance (Attendance): The attendance to record.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the attendance was added.
                - False if any selector is invalid or attendance already exists.
            - detail (str | None):
                - On success, a confirmation message suitable for a history entry.
                - On failure, a human-readable description of the error.
            - error (ErrorCode | str | None):
                - `ErrorCode.INVALID_CLASS_INDEX` if the class index is out of range.
                - `ErrorCode.INVALID_LESSON_INDEX` if the lesson index is out of range.
                - `ErrorCode.STUDENT_NOT_IN_CLASS` if the student is not on the class roster.
                - `ErrorCode.INVALID_WEEK` if the lesson has no occurrence in `week`.
                - `ErrorCode.DUPLICATE_ATTENDANCE` if attendance is already recorded.
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - data (dict | None):
                - On success: "dataset" (Dataset) and "attendance" (Attendance).

    Notes:
        - The input dataset is never modified.
    """
    try:
        target = _resolve_target(dataset, class_index, lesson_index, student_id, week)

        if target.record.has_attendance(student_id):
            raise DuplicateAttendanceError(
                f"Student {student_id} already has attendance recorded for week {week}."
            )

        updated_record = target.record.with_attendance(student_id, attendance)
        updated_dataset = _rebuild(
            dataset, class_index, lesson_index, target, week, updated_record
        )

    except ClassbookError as e:
        logger.debug("Rejected add-attendance: %s", e.message)
        return Response.from_exception(e, "Failed to add attendance")

    except Exception as e:
        logger.exception("Unexpected error while adding attendance")
        return Response.from_exception(e)

    detail = (
        f"Added attendance: {_student_name(dataset, student_id)} attended week {week} "
        f"lesson with participation score of {attendance}"
    )
    logger.info(detail)

    return Response.succeed(
        detail=detail,
        data={
            "dataset": updated_dataset,
            "attendance": attendance,
        },
    )


def edit_attendance(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    student_id: str,
    week: Week,
    descriptor: EditAttendanceDescriptor,
) -> Response:
    """
    Edits an existing attendance of a student in one week of a lesson.

    The checks run in order, and the first failure is returned:
        1. class index, then lesson index (`INVALID_CLASS_INDEX`, `INVALID_LESSON_INDEX`)
        2. roster membership (`STUDENT_NOT_IN_CLASS`)
        3. week within the lesson's occurrences (`INVALID_WEEK`)
        4. existing attendance (`ATTENDANCE_NOT_FOUND`)

    Edit never creates attendance; use `add_attendance()` for that. Fields missing from the
    descriptor default to their current values, so an empty descriptor yields an equal
    attendance in a new dataset. Rejecting empty descriptors is left to the caller.

    Returns:
        Response: On success, "dataset" (Dataset) and "attendance" (Attendance, the edited value).
    """
    try:
        target = _resolve_target(dataset, class_index, lesson_index, student_id, week)

        attendance_to_edit = target.record.attendance_of(student_id)
        edited_attendance = descriptor.apply(attendance_to_edit)

        updated_record = target.record.with_attendance(student_id, edited_attendance)
        updated_dataset = _rebuild(
            dataset, class_index, lesson_index, target, week, updated_record
        )

    except ClassbookError as e:
        logger.debug("Rejected edit-attendance: %s", e.message)
        return Response.from_exception(e, "Failed to edit attendance")

    except Exception as e:
        logger.exception("Unexpected error while editing attendance")
        return Response.from_exception(e)

    detail = (
        f"Edited attendance: {_student_name(dataset, student_id)} attended week {week} "
        f"lesson with participation score of {edited_attendance}"
    )
    logger.info(detail)

    return Response.succeed(
        detail=detail,
        data={
            "dataset": updated_dataset,
            "attendance": edited_attendance,
        },
    )


def delete_attendance(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    student_id: str,
    week: Week,
) -> Response:
    """
    Removes a student's attendance from one week of a lesson.

    Returns:
        Response: On success, "dataset" (Dataset) and "attendance" (Attendance, the removed value).
        Fails with the same codes as `edit_attendance()`.
    """
    try:
        target = _resolve_target(dataset, class_index, lesson_index, student_id, week)

        removed_attendance = target.record.attendance_of(student_id)
        updated_record = target.record.without(student_id)
        updated_dataset = _rebuild(
            dataset, class_index, lesson_index, target, week, updated_record
        )

    except ClassbookError as e:
        logger.debug("Rejected delete-attendance: %s", e.message)
        return Response.from_exception(e, "Failed to delete attendance")

    except Exception as e:
        logger.exception("Unexpected error while deleting attendance")
        return Response.from_exception(e)

    detail = (
        f"Deleted attendance: {_student_name(dataset, student_id)} in week {week} lesson"
    )
    logger.info(detail)

    return Response.succeed(
        detail=detail,
        data={
            "dataset": updated_dataset,
            "attendance": removed_attendance,
        },
    )


def delete_student_from_class(
    dataset: Dataset, class_index: int, student_id: str
) -> Response:
    """
    Removes a student from a class roster and from every week of every lesson in that class.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True unless the class index is invalid.
            - error (ErrorCode | None): `ErrorCode.INVALID_CLASS_INDEX` if the class index is out of range.
            - data (dict | None):
                - On success: "dataset" (Dataset) and "module_class" (ModuleClass, the updated class).

    Notes:
        - Idempotent: removing a student who is not in the class succeeds and yields an equal dataset.
        - Other students' attendance is untouched.
    """
    try:
        module_class = dataset.class_at(class_index)
        updated_class = module_class.without_student(student_id)
        updated_dataset = dataset.with_class_at(class_index, updated_class)

    except ClassbookError as e:
        logger.debug("Rejected unlink: %s", e.message)
        return Response.from_exception(e, "Failed to remove student from class")

    except Exception as e:
        logger.exception("Unexpected error while removing student from class")
        return Response.from_exception(e)

    detail = f"Removed student {_student_name(dataset, student_id)} from class {module_class.name}"
    logger.info(detail)

    return Response.succeed(
        detail=detail,
        data={
            "dataset": updated_dataset,
            "module_class": updated_class,
        },
    )


def delete_all_students_from_class(dataset: Dataset, class_index: int) -> Response:
    """
    Empties a class roster and clears every week of every lesson in that class.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True unless the class index is invalid.
            - error (ErrorCode | None): `ErrorCode.INVALID_CLASS_INDEX` if the class index is out of range.
            - data (dict | None):
                - On success: "dataset" (Dataset) and "module_class" (ModuleClass, the updated class).

    Notes:
        - Lessons and their number of occurrences are kept.
        - The students themselves stay in the dataset and in their other classes.
    """
    try:
        module_class = dataset.class_at(class_index)
        updated_class = module_class.without_all_students()
        updated_dataset = dataset.with_class_at(class_index, updated_class)

    except ClassbookError as e:
        logger.debug("Rejected clear-roster: %s", e.message)
        return Response.from_exception(e, "Failed to clear class roster")

    except Exception as e:
        logger.exception("Unexpected error while clearing class roster")
        return Response.from_exception(e)

    removed_names = sorted(
        _student_name(dataset, student_id) for student_id in module_class.student_ids
    )
    if removed_names:
        detail = f"Removed {format_list_with_and(removed_names)} from class {module_class.name}"
    else:
        detail = f"Class {module_class.name} has no students to remove"
    logger.info(detail)

    return Response.succeed(
        detail=detail,
        data={
            "dataset": updated_dataset,
            "module_class": updated_class,
        },
    )


# === helper methods ===


def _resolve_target(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    student_id: str,
    week: Week,
) -> _AttendanceTarget:
    """
    Runs the shared checks of the attendance operations, in order.

    Raises:
        ClassIndexOutOfRangeError, LessonIndexOutOfRangeError, StudentNotInClassError, InvalidWeekError
    """
    module_class = dataset.class_at(class_index)
    lesson = module_class.lesson_at(lesson_index)

    if not module_class.has_student(student_id):
        raise StudentNotInClassError(
            f"Student {student_id} is not in class {module_class.name}."
        )

    record_list = lesson.attendance_record_list
    if not record_list.is_week_contained(week):
        raise InvalidWeekError(
            f"Week {week} is not part of the lesson, which has "
            f"{lesson.number_of_occurrences} occurrence(s)."
        )

    return _AttendanceTarget(
        module_class, lesson, record_list, record_list.record_at(week)
    )


def _rebuild(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    target: _AttendanceTarget,
    week: Week,
    updated_record: AttendanceRecord,
) -> Dataset:
    updated_record_list = target.record_list.with_record_at(week, updated_record)
    updated_lesson = target.lesson.with_attendance_record_list(updated_record_list)
    updated_class = target.module_class.with_lesson_at(lesson_index, updated_lesson)
    return dataset.with_class_at(class_index, updated_class)


def _student_name(dataset: Dataset, student_id: str) -> str:
    response = dataset.find_student_by_uuid(student_id)
    return response.data["record"].name if response.success else student_id


__all__ = [
    "EditAttendanceDescriptor",
    "add_attendance",
    "delete_all_students_from_class",
    "delete_attendance",
    "delete_student_from_class",
    "edit_attendance",
    "get_attendance",
    "list_attendances",
]
