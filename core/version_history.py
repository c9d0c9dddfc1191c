# core/version_history.py

"""
Linear undo/redo history of committed `Dataset` snapshots.

`VersionHistory` keeps an ordered list of `HistorySnapshot`s and a pointer to the current one.
The first snapshot is a floor that cannot be undone past.

This enables workflows such as:
    - Committing the dataset returned by a successful edit operation
    - Undoing and redoing whole commands
    - Discarding the redo tail once a new command is committed after an undo

Snapshots hold immutable datasets that share structure with each other, so keeping every
version costs only the entities each command rebuilt. An optional `limit` caps the number of
snapshots; when exceeded the oldest are dropped and the oldest remaining becomes the floor.
"""

from __future__ import annotations

import datetime

from core.app_logging import get_logger
from core.config import Config
from core.exceptions import ConstraintViolationError, NoEarlierVersionError, NoLaterVersionError
from core.response import ErrorCode, Response
from models.dataset import Dataset

logger = get_logger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial state"


class HistorySnapshot:
    """One committed dataset and the message describing the command that produced it."""

    def __init__(
        self,
        dataset: Dataset,
        message: str,
        committed_at: datetime.datetime | None = None,
    ):
        self._dataset = dataset
        self._message = message
        self._committed_at = committed_at or datetime.datetime.now()

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def message(self) -> str:
        return self._message

    @property
    def committed_at(self) -> datetime.datetime:
        return self._committed_at

    def __repr__(self) -> str:
        return f"HistorySnapshot({self._message!r}, {self._committed_at.isoformat()})"


class VersionHistory:
    """
    An append-only, truncatable sequence of snapshots with a current pointer.

    Notes:
        - Only the snapshot list and the pointer are mutable; datasets are never modified.
        - Callers run one command to completion before starting the next.
    """

    def __init__(
        self,
        initial_dataset: Dataset | None = None,
        limit: int | None = None,
    ):
        if limit is not None and limit < 1:
            raise ConstraintViolationError(
                "Invalid history limit: must be a positive integer.",
                ErrorCode.INVALID_FIELD_VALUE,
            )

        if initial_dataset is None:
            initial_dataset = Dataset.empty()

        self._limit = limit
        self._snapshots: list[HistorySnapshot] = [
            HistorySnapshot(initial_dataset, INITIAL_COMMIT_MESSAGE)
        ]
        self._pointer = 0

    @classmethod
    def from_config(
        cls, config: Config, initial_dataset: Dataset | None = None
    ) -> VersionHistory:
        return cls(initial_dataset, limit=config.history_limit)

    # === properties ===

    @property
    def current(self) -> Dataset:
        return self._snapshots[self._pointer].dataset

    @property
    def current_message(self) -> str:
        return self._snapshots[self._pointer].message

    @property
    def current_index(self) -> int:
        return self._pointer

    @property
    def snapshots(self) -> list[HistorySnapshot]:
        return list(self._snapshots)

    @property
    def limit(self) -> int | None:
        return self._limit

    def can_undo(self) -> bool:
        return self._pointer > 0

    def can_redo(self) -> bool:
        return self._pointer < len(self._snapshots) - 1

    # === data manipulators ===

    def commit(self, dataset: Dataset, message: str) -> Response:
        """
        Commits a dataset as the new current version.

        Any snapshots after the current pointer (the redo tail) are discarded first.

        Args:
            dataset (Dataset): The dataset returned by a successful edit operation.
            message (str): A description of the command, shown on undo and redo.

        Returns:
            Response: Always successful; "dataset" (Dataset) holds the committed dataset.
        """
        discarded = len(self._snapshots) - self._pointer - 1
        del self._snapshots[self._pointer + 1 :]

        self._snapshots.append(HistorySnapshot(dataset, message))
        self._pointer = len(self._snapshots) - 1

        if self._limit is not None and len(self._snapshots) > self._limit:
            overflow = len(self._snapshots) - self._limit
            del self._snapshots[:overflow]
            self._pointer -= overflow

        if discarded:
            logger.debug("Discarded %d redo snapshot(s)", discarded)
        logger.info("Committed: %s", message)

        return Response.succeed(
            detail=message,
            data={
                "dataset": dataset,
            },
        )

    def commit_response(self, response: Response, message: str | None = None) -> Response:
        """
        Commits the dataset of a successful operation `Response`.

        Failed responses are returned unchanged and the history is left untouched, so a failed
        command can never become a snapshot.

        Args:
            response (Response): The result of an edit operation.
            message (str | None): Commit message. Defaults to `response.detail`.
        """
        if not response.success:
            return response

        dataset = response.data.get("dataset")
        if not isinstance(dataset, Dataset):
            return Response.fail(
                detail="Cannot commit a response without a dataset.",
                error=ErrorCode.INTERNAL_ERROR,
            )

        commit_response = self.commit(dataset, message or response.detail or "")

        return Response.succeed(
            detail=commit_response.detail,
            data=response.data,
        )

    def undo(self) -> Response:
        """
        Moves the pointer back one snapshot.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): False if the pointer is already at the first snapshot.
                - detail (str | None): On success, names the command that was undone.
                - error (ErrorCode | None): `ErrorCode.NO_EARLIER_VERSION` at the floor.
                - data (dict | None):
                    - On success: "dataset" (Dataset), the restored dataset.
        """
        if not self.can_undo():
            return Response.from_exception(NoEarlierVersionError())

        undone_message = self.current_message
        self._pointer -= 1
        logger.info("Undid: %s", undone_message)

        return Response.succeed(
            detail=f"Undo successful: {undone_message}",
            data={
                "dataset": self.current,
            },
        )

    def redo(self) -> Response:
        if not self.can_redo():
            return Response.from_exception(NoLaterVersionError())

        self._pointer += 1
        redone_message = self.current_message
        logger.info("Redid: %s", redone_message)

        return Response.succeed(
            detail=f"Redo successful: {redone_message}",
            data={
                "dataset": self.current,
            },
        )

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._snapshots)

    def __repr__(self) -> str:
        return f"VersionHistory({self._pointer + 1}/{len(self._snapshots)})"
