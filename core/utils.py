# core/utils.py

"""
Repository for program-wide utilities.

Includes the guards used by every `from_dict()` so that malformed external data surfaces as a
`ConstraintViolationError` instead of a raw `KeyError` or `TypeError`.
"""

import uuid
from typing import Any

from core.exceptions import ConstraintViolationError
from core.response import ErrorCode


def generate_uuid() -> str:
    return str(uuid.uuid4())


# === import guards ===


def require_dict(data: Any, label: str) -> dict:
    if not isinstance(data, dict):
        raise ConstraintViolationError(
            f"Invalid {label} data: expected an object, got {type(data).__name__}.",
            ErrorCode.INVALID_FIELD_VALUE,
        )
    return data


def require_list(data: Any, label: str) -> list:
    if not isinstance(data, list):
        raise ConstraintViolationError(
            f"Invalid {label} data: expected a list, got {type(data).__name__}.",
            ErrorCode.INVALID_FIELD_VALUE,
        )
    return data


def require_field(data: dict, key: str, label: str) -> Any:
    try:
        return data[key]

    except KeyError:
        raise ConstraintViolationError(
            f"Missing required field in {label} data: {key!r}.",
            ErrorCode.MISSING_REQUIRED_FIELD,
        ) from None
