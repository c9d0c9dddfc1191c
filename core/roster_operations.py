# core/roster_operations.py

"""
Edit operations for students, classes, and lessons.

Same contract as `core.attendance_operations`: each function takes a `Dataset` and resolved
arguments, and returns a `Response` whose `data["dataset"]` is the new `Dataset` on success. A
failed operation leaves no trace.
"""

from __future__ import annotations

import datetime
from typing import Any, Callable

from core.app_logging import get_logger
from core.exceptions import ClassbookError, ConstraintViolationError
from core.formatters import format_time_range
from core.response import ErrorCode, Response
from models.dataset import Dataset
from models.lesson import Day, Lesson
from models.module_class import ModuleClass
from models.student import Student

logger = get_logger(__name__)


class EditStudentDescriptor:
    """
    Stores the details to edit a student with.

    Fields are validated as they are given; each field left as None keeps the student's
    current value.
    """

    def __init__(self, name: str | None = None, email: str | None = None):
        self._name = None if name is None else Student.validate_name_input(name)
        self._email = None if email is None else Student.validate_email_input(email)

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def email(self) -> str | None:
        return self._email

    def is_any_field_edited(self) -> bool:
        return self._name is not None or self._email is not None

    def apply(self, student: Student) -> Student:
        return student.replace(name=self._name, email=self._email)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditStudentDescriptor):
            return NotImplemented
        return (self._name, self._email) == (other._name, other._email)

    def __repr__(self) -> str:
        return f"EditStudentDescriptor({self._name}, {self._email})"


class EditLessonDescriptor:
    """
    Stores the schedule details to edit a lesson with.

    Each field is validated on its own here. Whether the start time still precedes the end time
    can only be checked once the descriptor is applied to a lesson.
    """

    def __init__(
        self,
        start_time: datetime.time | None = None,
        end_time: datetime.time | None = None,
        day: Day | None = None,
        number_of_occurrences: int | None = None,
        venue: str | None = None,
    ):
        self._start_time = EditLessonDescriptor.validate_time_input(start_time)
        self._end_time = EditLessonDescriptor.validate_time_input(end_time)
        self._day = None if day is None else Lesson.validate_day_input(day)
        self._number_of_occurrences = (
            None
            if number_of_occurrences is None
            else Lesson.validate_occurrences_input(number_of_occurrences)
        )
        self._venue = None if venue is None else Lesson.validate_venue_input(venue)

    # === properties ===

    @property
    def start_time(self) -> datetime.time | None:
        return self._start_time

    @property
    def end_time(self) -> datetime.time | None:
        return self._end_time

    @property
    def day(self) -> Day | None:
        return self._day

    @property
    def number_of_occurrences(self) -> int | None:
        return self._number_of_occurrences

    @property
    def venue(self) -> str | None:
        return self._venue

    def is_any_field_edited(self) -> bool:
        return any(
            value is not None
            for value in (
                self._start_time,
                self._end_time,
                self._day,
                self._number_of_occurrences,
                self._venue,
            )
        )

    def apply(self, lesson: Lesson) -> Lesson:
        return lesson.with_schedule(
            start_time=self._start_time,
            end_time=self._end_time,
            day=self._day,
            number_of_occurrences=self._number_of_occurrences,
            venue=self._venue,
        )

    def __repr__(self) -> str:
        return (
            f"EditLessonDescriptor({self._start_time}, {self._end_time}, {self._day}, "
            f"{self._number_of_occurrences}, {self._venue})"
        )

    # === data validators ===

    @staticmethod
    def validate_time_input(value: Any) -> datetime.time | None:
        if value is not None and not isinstance(value, datetime.time):
            raise ConstraintViolationError(
                "Invalid input. Start and end times must be times of day.",
                ErrorCode.INVALID_TIME_RANGE,
            )
        return value


# --- student manipulation ---


def add_student(dataset: Dataset, student: Student) -> Response:
    """
    Adds a `Student` to the dataset.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True if the student was added.
            - error (ErrorCode | None): `ErrorCode.DUPLICATE_STUDENT` if the ID or email is taken.
            - data (dict | None):
                - On success: "dataset" (Dataset) and "record" (Student).
    """
    return _apply(
        "add student",
        lambda: dataset.with_student(student),
        f"New student added: {student.name}",
        record=student,
    )


def edit_student(
    dataset: Dataset, student_id: str, descriptor: EditStudentDescriptor
) -> Response:
    """
    Replaces a student's name and/or email, keeping the ID and every class reference intact.

    Returns:
        Response: Fails with `ErrorCode.NO_FIELDS_EDITED` for an empty descriptor,
        `ErrorCode.STUDENT_NOT_FOUND` for an unknown ID, `ErrorCode.DUPLICATE_STUDENT` if the
        new email is taken, or a constraint code for invalid values.
    """
    if not descriptor.is_any_field_edited():
        return Response.fail(
            detail="At least one field to edit must be provided.",
            error=ErrorCode.NO_FIELDS_EDITED,
        )

    try:
        edited_student = descriptor.apply(dataset.student(student_id))

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to edit student")

    return _apply(
        "edit student",
        lambda: dataset.with_student_replaced(edited_student),
        f"Edited student: {edited_student.name}",
        record=edited_student,
    )


def delete_student(dataset: Dataset, student_id: str) -> Response:
    """
    Deletes a student from the dataset, removing them from every class roster and attendance record.

    Returns:
        Response: Fails with `ErrorCode.STUDENT_NOT_FOUND` if no such student exists.
    """
    student_response = dataset.find_student_by_uuid(student_id)
    if not student_response.success:
        return student_response

    student = student_response.data["record"]

    return _apply(
        "delete student",
        lambda: dataset.without_student(student_id),
        f"Deleted student: {student.name}",
        record=student,
    )


def link_student(dataset: Dataset, class_index: int, student_id: str) -> Response:
    """Adds an existing student to a class roster."""
    try:
        student = dataset.student(student_id)
        module_class = dataset.class_at(class_index)

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to link student")

    return _apply(
        "link student",
        lambda: dataset.with_class_at(class_index, module_class.with_student(student_id)),
        f"Linked student {student.name} to class {module_class.name}",
        record=student,
    )


# --- class manipulation ---


def add_class(dataset: Dataset, module_class: ModuleClass) -> Response:
    return _apply(
        "add class",
        lambda: dataset.with_class(module_class),
        f"New class added: {module_class.name}",
        record=module_class,
    )


def edit_class(dataset: Dataset, class_index: int, name: str) -> Response:
    """
    Renames a class.

    Returns:
        Response: Fails with `ErrorCode.INVALID_CLASS_INDEX`, `ErrorCode.INVALID_NAME`, or
        `ErrorCode.DUPLICATE_CLASS` if another class already uses the name.
    """
    try:
        edited_class = dataset.class_at(class_index).with_name(name)

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to edit class")

    return _apply(
        "edit class",
        lambda: dataset.with_class_at(class_index, edited_class),
        f"Edited class: {edited_class.name}",
        record=edited_class,
    )


def delete_class(dataset: Dataset, class_index: int) -> Response:
    try:
        module_class = dataset.class_at(class_index)

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to delete class")

    return _apply(
        "delete class",
        lambda: dataset.without_class_at(class_index),
        f"Deleted class: {module_class.name}",
        record=module_class,
    )


# --- lesson manipulation ---


def add_lesson(dataset: Dataset, class_index: int, lesson: Lesson) -> Response:
    """
    Appends a lesson to a class.

    Returns:
        Response: Fails with `ErrorCode.INVALID_CLASS_INDEX`, or `ErrorCode.DUPLICATE_LESSON` if the class
        already has a lesson on the same day, time, and venue.
    """
    try:
        module_class = dataset.class_at(class_index)

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to add lesson")

    return _apply(
        "add lesson",
        lambda: dataset.with_class_at(class_index, module_class.with_lesson(lesson)),
        f"New lesson added to {module_class.name}: {_describe_lesson(lesson)}",
        record=lesson,
    )


def edit_lesson(
    dataset: Dataset,
    class_index: int,
    lesson_index: int,
    descriptor: EditLessonDescriptor,
) -> Response:
    """
    Edits the schedule of a lesson.

    Changing the number of occurrences resizes the lesson's attendance: weeks past the new count
    are dropped and new weeks start without attendance.
    """
    if not descriptor.is_any_field_edited():
        return Response.fail(
            detail="At least one field to edit must be provided.",
            error=ErrorCode.NO_FIELDS_EDITED,
        )

    try:
        module_class = dataset.class_at(class_index)
        edited_lesson = descriptor.apply(module_class.lesson_at(lesson_index))

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to edit lesson")

    return _apply(
        "edit lesson",
        lambda: dataset.with_class_at(
            class_index, module_class.with_lesson_at(lesson_index, edited_lesson)
        ),
        f"Edited lesson in {module_class.name}: {_describe_lesson(edited_lesson)}",
        record=edited_lesson,
    )


def delete_lesson(dataset: Dataset, class_index: int, lesson_index: int) -> Response:
    try:
        module_class = dataset.class_at(class_index)
        lesson = module_class.lesson_at(lesson_index)

    except ClassbookError as e:
        return Response.from_exception(e, "Failed to delete lesson")

    return _apply(
        "delete lesson",
        lambda: dataset.with_class_at(
            class_index, module_class.without_lesson_at(lesson_index)
        ),
        f"Deleted lesson from {module_class.name}: {_describe_lesson(lesson)}",
        record=lesson,
    )


# === helper methods ===


def _apply(
    action: str,
    build: Callable[[], Dataset],
    detail: str,
    record: object,
) -> Response:
    """
    Builds the new dataset and wraps the outcome in a `Response`.

    Args:
        action (str): Short description of the operation, used in failure details and logs.
        build (Callable[[], Dataset]): Produces the new dataset; may raise `ClassbookError`.
        detail (str): Success message.
        record (object): The entity added, edited, or removed, returned as "record".
    """
    try:
        updated_dataset = build()

    except ClassbookError as e:
        logger.debug("Rejected %s: %s", action, e.message)
        return Response.from_exception(e, f"Failed to {action}")

    except Exception as e:
        logger.exception("Unexpected error during %s", action)
        return Response.from_exception(e)

    logger.info(detail)

    return Response.succeed(
        detail=detail,
        data={
            "dataset": updated_dataset,
            "record": record,
        },
    )


def _describe_lesson(lesson: Lesson) -> str:
    return (
        f"{lesson.day.value} {format_time_range(lesson.start_time, lesson.end_time)} "
        f"at {lesson.venue}"
    )
