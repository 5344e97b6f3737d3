"""Domain models for the quiz service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question; immutable once the catalog is loaded."""

    id: int
    text: str
    options: tuple[str, ...]
    correct_option: int

    @property
    def option_count(self) -> int:
        return len(self.options)

    def is_correct(self, option_index: int) -> bool:
        # Out-of-range option indexes never match.
        if not 0 <= option_index < self.option_count:
            return False
        return option_index == self.correct_option


@dataclass(slots=True)
class UserRecord:
    """Per-user state owned by the quiz engine."""

    username: str
    credential: str
    user_id: str = field(default_factory=lambda: uuid4().hex)
    progress: list[int] = field(default_factory=list)
    score: int = 0
    quizzes_taken: int = 0
    quiz_active: bool = False
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def reset_attempt(self) -> None:
        self.progress = []
        self.score = 0

    def snapshot(self) -> "UserRecord":
        """Return a detached copy safe to hand out of the engine lock."""
        return UserRecord(
            username=self.username,
            credential=self.credential,
            user_id=self.user_id,
            progress=list(self.progress),
            score=self.score,
            quizzes_taken=self.quizzes_taken,
            quiz_active=self.quiz_active,
            registered_at=self.registered_at,
        )


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Immutable leaderboard row."""

    username: str
    score: int


@dataclass(frozen=True, slots=True)
class StatsReport:
    """Percentile ranking of one user against the whole population."""

    username: str
    score: int
    better_count: int
    total_users: int
    percentage: float
    message: str
    users: list[UserSummary]
