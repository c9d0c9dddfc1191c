# models/dataset.py

"""
The Dataset model is the root aggregate of the program and the "source of truth" for all records
at one point in time.

A `Dataset` holds every `Student` (keyed by ID, in insertion order) and every `ModuleClass` (in
display order). It is immutable: each manipulator returns a new `Dataset`, rebuilding only the
path from the root to the changed entity and sharing everything else with the source.

Invariants checked at construction:
- Every student ID on any class roster belongs to a student in the dataset.
- Class names are unique (case-insensitive).
- Student IDs and emails are unique.

Provides read accessors for rendering (students, classes, lessons, attendance summaries) and
lookup methods that return a `Response` in the same shape as the edit operations.
"""

from __future__ import annotations

from collections.abc import Iterable, Set
from typing import Callable

from core.exceptions import (
    ClassIndexOutOfRangeError,
    ConstraintViolationError,
    DuplicateClassError,
    DuplicateStudentError,
    StudentNotFoundError,
)
from core.response import ErrorCode, Response
from core.utils import require_dict, require_list
from models.attendance import Attendance
from models.lesson import Lesson
from models.module_class import ModuleClass
from models.student import Student
from models.types import RecordType


class Dataset:

    def __init__(
        self,
        students: Iterable[Student] = (),
        classes: Iterable[ModuleClass] = (),
    ):
        self._students: dict[str, Student] = {}
        self._emails: frozenset[str] = frozenset()

        emails: set[str] = set()
        for student in students:
            self._require_unique_student(student, emails)
            self._students[student.id] = student
            emails.add(self._normalize(student.email))
        self._emails = frozenset(emails)

        self._classes: tuple[ModuleClass, ...] = tuple(classes)
        class_names: set[str] = set()
        for module_class in self._classes:
            self._require_class(module_class, class_names)
            class_names.add(self._normalize(module_class.name))

    @classmethod
    def empty(cls) -> Dataset:
        return cls()

    @classmethod
    def _derive(
        cls,
        students: dict[str, Student],
        emails: frozenset[str],
        classes: tuple[ModuleClass, ...],
    ) -> Dataset:
        """
        Builds a dataset from parts that are already validated.

        Manipulators check only the entity they change and share the rest with the source.
        """
        dataset = cls.__new__(cls)
        dataset._students = students
        dataset._emails = emails
        dataset._classes = classes
        return dataset

    # === properties ===

    @property
    def students(self) -> dict[str, Student]:
        return self._students.copy()

    @property
    def classes(self) -> list[ModuleClass]:
        return list(self._classes)

    # === data accessors ===

    def list_students(self) -> list[Student]:
        return list(self._students.values())

    def list_classes(self) -> list[ModuleClass]:
        return list(self._classes)

    def list_lessons(self, class_index: int) -> list[Lesson]:
        return self.class_at(class_index).lessons

    def list_students_in_class(self, class_index: int) -> list[Student]:
        module_class = self.class_at(class_index)
        return [
            student
            for student in self._students.values()
            if module_class.has_student(student.id)
        ]

    def list_attendances(
        self, class_index: int, lesson_index: int, student_id: str
    ) -> list[Attendance | None]:
        """
        Lists a student's attendance across every week of a lesson, in week order.

        Returns:
            list[Attendance | None]: One entry per occurrence; None where no attendance was recorded.

        Raises:
            ClassIndexOutOfRangeError: If `class_index` is invalid.
            LessonIndexOutOfRangeError: If `lesson_index` is invalid.
        """
        lesson = self.class_at(class_index).lesson_at(lesson_index)
        return lesson.attendances_of(student_id)

    def has_student(self, student_id: str) -> bool:
        return student_id in self._students

    def student(self, student_id: str) -> Student:
        try:
            return self._students[student_id]

        except KeyError:
            raise StudentNotFoundError(
                f"No student found with ID {student_id}."
            ) from None

    def class_at(self, index: int) -> ModuleClass:
        if not 0 <= index < len(self._classes):
            raise ClassIndexOutOfRangeError(
                f"Class index {index} is out of range: there are {len(self._classes)} class(es)."
            )
        return self._classes[index]

    def classes_of_student(self, student_id: str) -> list[ModuleClass]:
        return [c for c in self._classes if c.has_student(student_id)]

    # --- lookups ---

    def get_records(
        self,
        records: Iterable[RecordType],
        predicate: Callable[[RecordType], bool] | None = None,
    ) -> Response:
        """
        Fetches records, optionally filtered by a predicate.

        Args:
            records (Iterable[RecordType]): The records to filter, e.g. `dataset.list_students()`.
            predicate (Callable[[RecordType], bool]): Optional filter function. If omitted, all records are returned.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True, even if no records match.
                - data (dict | None): Payload with the following keys:
                    - "records" (list[RecordType]): The list of matching records (may be empty).

        Notes:
            - This method is read-only and never raises.
        """
        if predicate:
            matches = list(filter(predicate, records))
        else:
            matches = list(records)

        return Response.succeed(
            data={
                "records": matches,
            }
        )

    def find_student_by_uuid(self, uuid: str) -> Response:
        """
        Finds a `Student` by UUID.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the student was found.
                - error (ErrorCode | None): `ErrorCode.STUDENT_NOT_FOUND` if no match is found.
                - status_code (int | None): 200 on success, 404 if not found.
                - data (dict | None):
                    - On success: "record" (Student): The matched student.

        Notes:
            - This method is read-only and does not raise.
        """
        student = self._students.get(uuid)

        if student is None:
            return Response.fail(
                detail=f"No matching student found for {uuid}.",
                error=ErrorCode.STUDENT_NOT_FOUND,
            )

        return Response.succeed(
            data={
                "record": student,
            },
        )

    def find_student_by_query(self, query: str) -> Response:
        """
        Finds every `Student` whose name or email contains `query` (case-insensitive).

        Returns:
            Response: Always successful; "records" (list[Student]) holds the matches, possibly empty.
        """
        normalized = self._normalize(query)

        return self.get_records(
            self._students.values(),
            lambda s: normalized in self._normalize(s.name)
            or normalized in self._normalize(s.email),
        )

    def find_class_by_name(self, name: str) -> Response:
        normalized = self._normalize(name)

        for index, module_class in enumerate(self._classes):
            if self._normalize(module_class.name) == normalized:
                return Response.succeed(
                    data={
                        "record": module_class,
                        "index": index,
                    },
                )

        return Response.fail(
            detail=f"No matching class found for {name}.",
            error=ErrorCode.NOT_FOUND,
        )

    # === data manipulators ===

    # --- student manipulation ---

    def with_student(self, student: Student) -> Dataset:
        self._require_unique_student(student, self._emails)

        students = {**self._students, student.id: student}
        emails = self._emails | {self._normalize(student.email)}
        return Dataset._derive(students, emails, self._classes)

    def with_student_replaced(self, student: Student) -> Dataset:
        """
        Returns a dataset where the student with the same ID is replaced by `student`.

        Raises:
            StudentNotFoundError: If no student shares `student.id`.
            DuplicateStudentError: If the new email clashes with another student.
        """
        if not isinstance(student, Student):
            raise ConstraintViolationError(
                f"Invalid student: {student!r}.", ErrorCode.INVALID_FIELD_VALUE
            )

        old_email = self._normalize(self.student(student.id).email)
        new_email = self._normalize(student.email)

        if new_email != old_email and new_email in self._emails:
            raise DuplicateStudentError(
                f"A student with the email '{student.email}' already exists."
            )

        students = dict(self._students)
        students[student.id] = student
        emails = (self._emails - {old_email}) | {new_email}
        return Dataset._derive(students, emails, self._classes)

    def without_student(self, student_id: str) -> Dataset:
        """
        Removes a student and cascades the removal through every class roster and attendance record.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        removed = self.student(student_id)

        students = {id: s for id, s in self._students.items() if id != student_id}
        emails = self._emails - {self._normalize(removed.email)}
        classes = tuple(
            c.without_student(student_id) if c.has_student(student_id) else c
            for c in self._classes
        )
        return Dataset._derive(students, emails, classes)

    # --- class manipulation ---

    def with_class(self, module_class: ModuleClass) -> Dataset:
        self._require_class(module_class, self._class_names())
        return Dataset._derive(
            self._students, self._emails, self._classes + (module_class,)
        )

    def with_class_at(self, index: int, module_class: ModuleClass) -> Dataset:
        """Returns a dataset with the class at `index` replaced; every other class is shared."""
        self.class_at(index)
        self._require_class(module_class, self._class_names(excluding=index))

        classes = list(self._classes)
        classes[index] = module_class
        return Dataset._derive(self._students, self._emails, tuple(classes))

    def without_class_at(self, index: int) -> Dataset:
        self.class_at(index)
        return Dataset._derive(
            self._students,
            self._emails,
            self._classes[:index] + self._classes[index + 1 :],
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "students": [s.to_dict() for s in self._students.values()],
            "classes": [c.to_dict() for c in self._classes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Dataset:
        data = require_dict(data, "dataset")
        students = require_list(data.get("students", []), "dataset students")
        classes = require_list(data.get("classes", []), "dataset classes")

        return cls(
            students=[Student.from_dict(s) for s in students],
            classes=[ModuleClass.from_dict(c) for c in classes],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return (
            list(self._students.values()) == list(other._students.values())
            and self._classes == other._classes
        )

    def __hash__(self) -> int:
        return hash((tuple(self._students.values()), self._classes))

    def __repr__(self) -> str:
        return f"Dataset({len(self._students)} student(s), {len(self._classes)} class(es))"

    # === data validators ===

    def _require_unique_student(self, student: Student, emails: Set[str]) -> None:
        """
        Checks a single student against the IDs already held and a set of normalized emails.

        Raises:
            ConstraintViolationError: If `student` is not a `Student`.
            DuplicateStudentError: If the ID or email is already taken.
        """
        if not isinstance(student, Student):
            raise ConstraintViolationError(
                f"Invalid student: {student!r}.", ErrorCode.INVALID_FIELD_VALUE
            )

        if student.id in self._students:
            raise DuplicateStudentError(
                f"A student with the ID '{student.id}' already exists."
            )

        if self._normalize(student.email) in emails:
            raise DuplicateStudentError(
                f"A student with the email '{student.email}' already exists."
            )

    def _require_class(self, module_class: ModuleClass, class_names: Set[str]) -> None:
        """
        Checks a single class: its type, a unique name among `class_names`, and a roster of known students.
        """
        if not isinstance(module_class, ModuleClass):
            raise ConstraintViolationError(
                f"Invalid class: {module_class!r}.", ErrorCode.INVALID_FIELD_VALUE
            )

        if self._normalize(module_class.name) in class_names:
            raise DuplicateClassError(
                f"A class with the name '{module_class.name}' already exists."
            )

        unknown = module_class.student_ids - self._students.keys()
        if unknown:
            raise ConstraintViolationError(
                f"Class {module_class.name} refers to unknown students: {', '.join(sorted(unknown))}.",
                ErrorCode.INVALID_REFERENCE,
            )

    # === helper methods ===

    def _class_names(self, excluding: int | None = None) -> set[str]:
        return {
            self._normalize(c.name)
            for index, c in enumerate(self._classes)
            if index != excluding
        }

    def _normalize(self, input: str) -> str:
        return input.strip().lower()
