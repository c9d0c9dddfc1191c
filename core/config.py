# core/config.py

"""
Runtime configuration for the Classbook core.

Values are read from environment variables. A local `.env` file is loaded first when
present, which is convenient during development; real environment variables always win.

Recognized variables:
    - CLASSBOOK_LOG_LEVEL: standard logging level name (default "INFO").
    - CLASSBOOK_LOG_FORMAT: "text" or "json" (default "text").
    - CLASSBOOK_HISTORY_LIMIT: maximum number of snapshots kept by `VersionHistory`.
      Blank or "0" means unbounded.
"""

from __future__ import annotations

import os
from typing import Mapping

from dotenv import load_dotenv

from core.exceptions import ConstraintViolationError
from core.response import ErrorCode

LOG_FORMATS = ("text", "json")


class Config:

    def __init__(
        self,
        log_level: str = "INFO",
        log_format: str = "text",
        history_limit: int | None = None,
    ):
        self._log_level = log_level.strip().upper()
        self._log_format = Config.validate_log_format(log_format)
        self._history_limit = Config.validate_history_limit(history_limit)

    # === properties ===

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_format(self) -> str:
        return self._log_format

    @property
    def history_limit(self) -> int | None:
        return self._history_limit

    # === public classmethods ===

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, load_env_file: bool = True
    ) -> Config:
        """
        Builds a `Config` from environment variables.

        Args:
            environ (Mapping[str, str] | None): Variables to read. Defaults to `os.environ`.
            load_env_file (bool): Whether to load a `.env` file into `os.environ` first.

        Returns:
            Config: The resolved configuration.

        Raises:
            ConstraintViolationError: If a variable holds an invalid value.
        """
        if load_env_file:
            load_dotenv()

        if environ is None:
            environ = os.environ

        raw_limit = environ.get("CLASSBOOK_HISTORY_LIMIT", "").strip()

        return cls(
            log_level=environ.get("CLASSBOOK_LOG_LEVEL", "INFO"),
            log_format=environ.get("CLASSBOOK_LOG_FORMAT", "text"),
            history_limit=Config.parse_history_limit(raw_limit),
        )

    # === data validators ===

    @staticmethod
    def parse_history_limit(raw_limit: str) -> int | None:
        if not raw_limit:
            return None

        try:
            limit = int(raw_limit)

        except ValueError:
            raise ConstraintViolationError(
                f"Invalid history limit: {raw_limit!r} is not an integer.",
                ErrorCode.INVALID_FIELD_VALUE,
            ) from None

        return limit or None

    @staticmethod
    def validate_history_limit(history_limit: int | None) -> int | None:
        if history_limit is None:
            return None

        if history_limit < 1:
            raise ConstraintViolationError(
                "Invalid history limit: must be a positive integer.",
                ErrorCode.INVALID_FIELD_VALUE,
            )

        return history_limit

    @staticmethod
    def validate_log_format(log_format: str) -> str:
        log_format = log_format.strip().lower()

        if log_format not in LOG_FORMATS:
            raise ConstraintViolationError(
                f"Invalid log format: {log_format!r}. Expected one of {', '.join(LOG_FORMATS)}.",
                ErrorCode.INVALID_FIELD_VALUE,
            )

        return log_format

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Config({self._log_level}, {self._log_format}, {self._history_limit})"
