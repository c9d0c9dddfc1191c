# models/attendance.py

"""
Represents one student's attendance at a single lesson occurrence.

An `Attendance` only exists for occurrences the student actually attended; the participation
score records how actively they took part, from 0 to 100 inclusive.
"""

from __future__ import annotations

from typing import Any

from core.exceptions import ConstraintViolationError
from core.response import ErrorCode
from core.utils import require_dict, require_field

MIN_PARTICIPATION_SCORE = 0
MAX_PARTICIPATION_SCORE = 100


class Attendance:

    def __init__(self, participation_score: int):
        self._participation_score = Attendance.validate_participation_score_input(
            participation_score
        )

    @property
    def participation_score(self) -> int:
        return self._participation_score

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {"participation_score": self._participation_score}

    @classmethod
    def from_dict(cls, data: dict) -> Attendance:
        data = require_dict(data, "attendance")
        return cls(
            participation_score=require_field(data, "participation_score", "attendance")
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attendance):
            return NotImplemented
        return self._participation_score == other._participation_score

    def __hash__(self) -> int:
        return hash(("Attendance", self._participation_score))

    def __repr__(self) -> str:
        return f"Attendance({self._participation_score})"

    def __str__(self) -> str:
        return str(self._participation_score)

    # === data validators ===

    @staticmethod
    def validate_participation_score_input(score: Any) -> int:
        """
        Validates a participation score.

        Args:
            score (Any): The input value to validate.

        Returns:
            The score, unchanged.

        Raises:
            ConstraintViolationError: If the input is not an integer or falls outside 0 to 100.

        Notes:
            - `bool` is rejected even though it subclasses `int`.
        """
        if isinstance(score, bool) or not isinstance(score, int):
            raise ConstraintViolationError(
                "Invalid input. Participation score must be a whole number.",
                ErrorCode.INVALID_PARTICIPATION_SCORE,
            )

        if not MIN_PARTICIPATION_SCORE <= score <= MAX_PARTICIPATION_SCORE:
            raise ConstraintViolationError(
                f"Invalid input. Participation score must be between "
                f"{MIN_PARTICIPATION_SCORE} and {MAX_PARTICIPATION_SCORE}.",
                ErrorCode.INVALID_PARTICIPATION_SCORE,
            )

        return score
