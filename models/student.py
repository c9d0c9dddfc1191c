# models/student.py

"""
Represents a student known to the Classbook.

Stores core identifying information such as name, email, and a unique ID. The ID is the only
value other entities hold on to: class rosters and attendance records refer to students by ID
and never own a `Student`.

Students are immutable. Edits produce a new `Student` with the same ID via `replace()`.
"""

from __future__ import annotations

import re

from core.exceptions import ConstraintViolationError
from core.response import ErrorCode
from core.utils import generate_uuid, require_dict, require_field


class Student:

    def __init__(self, id: str, name: str, email: str):
        if not isinstance(id, str) or not id.strip():
            raise ConstraintViolationError(
                "Invalid input. Student ID cannot be blank.",
                ErrorCode.MISSING_REQUIRED_FIELD,
            )
        self._id: str = id
        self._name: str = Student.validate_name_input(name)
        self._email: str = Student.validate_email_input(email)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    # === public classmethods ===

    @classmethod
    def create(cls, name: str, email: str) -> Student:
        return cls(generate_uuid(), name, email)

    def replace(self, name: str | None = None, email: str | None = None) -> Student:
        return Student(
            self._id,
            name if name is not None else self._name,
            email if email is not None else self._email,
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "email": self._email,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        data = require_dict(data, "student")
        return cls(
            id=require_field(data, "id", "student"),
            name=require_field(data, "name", "student"),
            email=require_field(data, "email", "student"),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return (self._id, self._name, self._email) == (
            other._id,
            other._name,
            other._email,
        )

    def __hash__(self) -> int:
        return hash((self._id, self._name, self._email))

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._email})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self._name}, email: {self._email}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: str) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ConstraintViolationError(
                "Invalid input. Name cannot be blank.", ErrorCode.INVALID_NAME
            )
        return name.strip()

    @staticmethod
    def validate_email_input(email: str) -> str:
        """
        Validates and normalizes a Student email address.

        Normalizes the input by stripping whitespace and converting to lowercase.
        Ensures the email:
            - Contains exactly one '@' symbol
            - Has non-whitespace characters on both sides of the '@'
            - Contains at least one '.' after the '@' to separate the domain and TLD

        Args:
            email: The input email string to validate.

        Returns:
            A normalized, lowercase version of the email if valid.

        Raises:
            ConstraintViolationError: If the email does not conform to the expected format.
        """
        if not isinstance(email, str):
            raise ConstraintViolationError(
                "Invalid input. Email must be a string.", ErrorCode.INVALID_EMAIL
            )

        email = email.strip().lower()
        if not re.fullmatch(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
            raise ConstraintViolationError(
                "Invalid input. Email must be a valid address with one @ and a domain.",
                ErrorCode.INVALID_EMAIL,
            )
        return email
