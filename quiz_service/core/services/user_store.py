"""Service holding the per-user records of the quiz engine."""

from __future__ import annotations

from quiz_service.core.errors import UserAlreadyExistsError, UserNotFoundError
from quiz_service.core.models import UserRecord


class UserStore:
    """Username-keyed record map.

    Not synchronized on its own: the owning ``QuizEngine`` holds its lock
    around every call.
    """

    def __init__(self) -> None:
        self._records: dict[str, UserRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, username: object) -> bool:
        return username in self._records

    def add(self, record: UserRecord) -> UserRecord:
        if record.username in self._records:
            raise UserAlreadyExistsError(record.username)
        self._records[record.username] = record
        return record

    def get(self, username: str) -> UserRecord | None:
        return self._records.get(username)

    def require(self, username: str) -> UserRecord:
        record = self._records.get(username)
        if record is None:
            raise UserNotFoundError(username)
        return record

    def records(self) -> list[UserRecord]:
        """Return the live records in registration order."""
        return list(self._records.values())

    def active_records(self) -> list[UserRecord]:
        return [record for record in self._records.values() if record.quiz_active]
