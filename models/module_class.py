# models/module_class.py

"""
Represents a class taught by the educator, such as a tutorial group of a module.

A `ModuleClass` has a name, a roster of student IDs, and an ordered list of `Lesson`s. The
roster refers to students by ID only; the `Dataset` is the single source of truth for the
students themselves.

Invariants checked at construction:
- Every student ID with attendance in any lesson is on the roster.
- No two lessons share the same day, start time, end time, and venue.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.exceptions import (
    ConstraintViolationError,
    DuplicateLessonError,
    DuplicateStudentInClassError,
    LessonIndexOutOfRangeError,
)
from core.formatters import format_list_with_and, format_time_range
from core.response import ErrorCode
from core.utils import require_dict, require_field, require_list
from models.lesson import Lesson


class ModuleClass:

    def __init__(
        self,
        name: str,
        student_ids: Iterable[str] = (),
        lessons: Iterable[Lesson] = (),
    ):
        self._name: str = ModuleClass.validate_name_input(name)
        self._student_ids: frozenset[str] = ModuleClass.validate_student_ids_input(
            student_ids
        )
        self._lessons: tuple[Lesson, ...] = tuple(lessons)

        for index, lesson in enumerate(self._lessons):
            if not isinstance(lesson, Lesson):
                raise ConstraintViolationError(
                    f"Invalid lesson in class {self._name}: {lesson!r}.",
                    ErrorCode.INVALID_FIELD_VALUE,
                )
            self._require_unique_lesson(lesson, self._lessons[:index])
            self._require_attendance_within_roster(lesson)

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def student_ids(self) -> frozenset[str]:
        return self._student_ids

    @property
    def lessons(self) -> list[Lesson]:
        return list(self._lessons)

    # === data accessors ===

    def has_student(self, student_id: str) -> bool:
        return student_id in self._student_ids

    def lesson_at(self, index: int) -> Lesson:
        self._require_lesson_index(index)
        return self._lessons[index]

    def is_same_class(self, other: ModuleClass) -> bool:
        return self._name.lower() == other._name.lower()

    # === data manipulators ===

    def with_name(self, name: str) -> ModuleClass:
        return ModuleClass(name, self._student_ids, self._lessons)

    def with_lesson_at(self, index: int, lesson: Lesson) -> ModuleClass:
        """
        Returns a class with the lesson at `index` replaced.

        Raises:
            LessonIndexOutOfRangeError: If `index` does not refer to an existing lesson.
            DuplicateLessonError: If `lesson` clashes with another lesson of the class.
            ConstraintViolationError: If `lesson` records attendance for a student outside the roster.
        """
        self._require_lesson_index(index)

        lessons = list(self._lessons)
        lessons[index] = lesson
        return ModuleClass(self._name, self._student_ids, lessons)

    def with_lesson(self, lesson: Lesson) -> ModuleClass:
        return ModuleClass(self._name, self._student_ids, self._lessons + (lesson,))

    def without_lesson_at(self, index: int) -> ModuleClass:
        self._require_lesson_index(index)
        return ModuleClass(
            self._name,
            self._student_ids,
            self._lessons[:index] + self._lessons[index + 1 :],
        )

    def with_student(self, student_id: str) -> ModuleClass:
        if student_id in self._student_ids:
            raise DuplicateStudentInClassError(
                f"Student {student_id} is already in class {self._name}."
            )
        return ModuleClass(self._name, self._student_ids | {student_id}, self._lessons)

    def without_student(self, student_id: str) -> ModuleClass:
        """
        Removes a student from the roster and from every week of every lesson.

        Notes:
            - Idempotent: removing a student who is not in the class yields an equal class.
        """
        return ModuleClass(
            self._name,
            self._student_ids - {student_id},
            (lesson.without_student(student_id) for lesson in self._lessons),
        )

    def without_all_students(self) -> ModuleClass:
        return ModuleClass(
            self._name,
            (),
            (lesson.without_all_students() for lesson in self._lessons),
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "student_ids": sorted(self._student_ids),
            "lessons": [lesson.to_dict() for lesson in self._lessons],
        }

    @classmethod
    def from_dict(cls, data: dict) -> ModuleClass:
        data = require_dict(data, "class")
        lessons = require_list(data.get("lessons", []), "class lessons")

        return cls(
            name=require_field(data, "name", "class"),
            student_ids=require_list(data.get("student_ids", []), "class roster"),
            lessons=[Lesson.from_dict(lesson) for lesson in lessons],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleClass):
            return NotImplemented
        return (self._name, self._student_ids, self._lessons) == (
            other._name,
            other._student_ids,
            other._lessons,
        )

    def __hash__(self) -> int:
        return hash((self._name, self._student_ids, self._lessons))

    def __repr__(self) -> str:
        return f"ModuleClass({self._name}, {len(self._student_ids)} student(s), {len(self._lessons)} lesson(s))"

    def __str__(self) -> str:
        return f"CLASS: {self._name}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ConstraintViolationError(
                "Invalid input. Class name cannot be blank.", ErrorCode.INVALID_NAME
            )
        return name.strip()

    @staticmethod
    def validate_student_ids_input(student_ids: Iterable[str]) -> frozenset[str]:
        if isinstance(student_ids, str):
            raise ConstraintViolationError(
                f"Invalid roster: expected a collection of student IDs, got the string {student_ids!r}.",
                ErrorCode.INVALID_FIELD_VALUE,
            )

        try:
            student_ids = frozenset(student_ids)

        except TypeError:
            raise ConstraintViolationError(
                "Invalid roster: student IDs must be strings.",
                ErrorCode.INVALID_FIELD_VALUE,
            ) from None

        for student_id in student_ids:
            if not isinstance(student_id, str) or not student_id.strip():
                raise ConstraintViolationError(
                    f"Invalid student ID in roster: {student_id!r}.",
                    ErrorCode.INVALID_FIELD_VALUE,
                )

        return student_ids

    # === helper methods ===

    def _require_lesson_index(self, index: int) -> None:
        if not 0 <= index < len(self._lessons):
            raise LessonIndexOutOfRangeError(
                f"Lesson index {index} is out of range: class {self._name} has {len(self._lessons)} lesson(s)."
            )

    def _require_unique_lesson(self, lesson: Lesson, others: Iterable[Lesson]) -> None:
        if any(lesson.is_same_lesson(other) for other in others):
            raise DuplicateLessonError(
                f"Class {self._name} already has a lesson on {lesson.day.value} "
                f"{format_time_range(lesson.start_time, lesson.end_time)} at {lesson.venue}."
            )

    def _require_attendance_within_roster(self, lesson: Lesson) -> None:
        strangers = lesson.student_ids - self._student_ids
        if strangers:
            raise ConstraintViolationError(
                f"Lesson in class {self._name} records attendance for students outside the roster: "
                f"{format_list_with_and(sorted(strangers))}.",
                ErrorCode.INVALID_REFERENCE,
            )
