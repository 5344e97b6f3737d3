"""Quiz session engine: per-user attempt state, expiry and scoring."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from threading import Lock

from quiz_service.constants.quiz_constants import SESSION_TIMEOUT_SECONDS
from quiz_service.core.errors import (
    InvalidQuestionIndexError,
    QuizCompleteError,
    QuizNotStartedError,
)
from quiz_service.core.models import Question, StatsReport, UserRecord, UserSummary
from quiz_service.core.services.question_catalog import QuestionCatalog
from quiz_service.core.services.session_timers import (
    SessionTimerRegistry,
    TimerFactory,
    TimerHandle,
)
from quiz_service.core.services.statistics import compute_stats
from quiz_service.core.services.user_store import UserStore

logger = logging.getLogger(__name__)


class QuizEngine:
    """Facade over the catalog, user store, timer registry and statistics.

    A single lock covers the store, the timer registry and the catalog
    reference. Every public method takes it, and so does the timer expiry
    callback, which runs on the timer's own thread.
    """

    def __init__(
        self,
        session_timeout_seconds: float = SESSION_TIMEOUT_SECONDS,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._lock = Lock()
        self._session_timeout_seconds = session_timeout_seconds

        # Services
        self._catalog = QuestionCatalog()
        self._users = UserStore()
        self._timers = SessionTimerRegistry(timer_factory) if timer_factory else SessionTimerRegistry()

    @property
    def session_timeout_seconds(self) -> float:
        return self._session_timeout_seconds

    # --- Catalog ---

    def load_questions(self, questions: Iterable[Question]) -> int:
        """Replace the catalog; returns the number of questions loaded."""
        catalog = QuestionCatalog(questions)
        with self._lock:
            reset = 0
            for record in self._users.active_records():
                self._timers.cancel(record.username)
                record.reset_attempt()
                record.quiz_active = False
                reset += 1
            self._catalog = catalog
        if reset:
            logger.warning("Catalog replaced; %d active attempt(s) reset", reset)
        logger.info("Questions loaded successfully: %d", len(catalog))
        return len(catalog)

    def get_questions(self) -> list[Question]:
        with self._lock:
            return self._catalog.get_questions()

    def get_question_count(self) -> int:
        with self._lock:
            return len(self._catalog)

    # --- Users ---

    def register_user(self, username: str, credential: str) -> UserRecord:
        with self._lock:
            record = self._users.add(UserRecord(username=username, credential=credential))
            snapshot = record.snapshot()
        logger.info("User registered: %s (%s)", username, snapshot.user_id)
        return snapshot

    def get_user(self, username: str) -> UserRecord:
        with self._lock:
            return self._users.require(username).snapshot()

    def has_user(self, username: str) -> bool:
        with self._lock:
            return username in self._users

    def get_user_count(self) -> int:
        with self._lock:
            return len(self._users)

    def get_progress(self, username: str) -> list[int]:
        with self._lock:
            return list(self._users.require(username).progress)

    # --- Quiz session ---

    def start_quiz(self, username: str) -> None:
        """Begin a fresh attempt and (re)arm the user's expiry timer."""
        with self._lock:
            record = self._users.require(username)
            record.reset_attempt()
            record.quiz_active = True
            record.quizzes_taken += 1
            self._timers.arm(username, self._session_timeout_seconds, self._expire_session)
            attempt = record.quizzes_taken
        logger.info("Quiz session started for %s (attempt %d)", username, attempt)

    def get_next_question(self, username: str) -> Question:
        """Issue the question at the user's cursor and advance the cursor."""
        with self._lock:
            record = self._users.get(username)
            if record is None or not record.quiz_active:
                logger.error("Quiz not started for user %s", username)
                raise QuizNotStartedError(username)

            cursor = len(record.progress)
            if cursor >= len(self._catalog):
                logger.info("No more questions available for %s", username)
                raise QuizCompleteError(username)

            question = self._catalog[cursor]
            record.progress.append(question.id)
        logger.info("Next question issued to %s (index %d)", username, cursor)
        return question

    def submit_answer(self, username: str, question_index: int, answer_option: int) -> bool:
        """Score one answer. Repeat submissions for the same index score again."""
        with self._lock:
            record = self._users.require(username)
            if not self._catalog.contains_index(question_index):
                logger.error("Invalid question index %d from %s", question_index, username)
                raise InvalidQuestionIndexError(question_index, len(self._catalog))

            correct = self._catalog[question_index].is_correct(answer_option)
            if correct:
                record.score += 1
            score = record.score
        logger.info(
            "%s answer submitted by %s for question %d (score %d)",
            "Correct" if correct else "Incorrect",
            username,
            question_index,
            score,
        )
        return correct

    def get_results(self, username: str) -> int:
        with self._lock:
            record = self._users.get(username)
            if record is None or not record.quiz_active:
                logger.error("Quiz not started for user %s", username)
                raise QuizNotStartedError(username)
            score = record.score
        logger.info("Final score retrieved for %s: %d", username, score)
        return score

    # --- Statistics ---

    def get_stats(self, username: str) -> StatsReport:
        with self._lock:
            summaries = [UserSummary(r.username, r.score) for r in self._users.records()]
        return compute_stats(username, summaries)

    # --- Timers ---

    def active_session_count(self) -> int:
        with self._lock:
            return len(self._timers)

    def shutdown(self) -> None:
        with self._lock:
            cancelled = self._timers.cancel_all()
        logger.info("Quiz engine shut down; %d session timer(s) cancelled", cancelled)

    def _expire_session(self, username: str, timer: TimerHandle) -> None:
        """Timer callback: reset the attempt the timer was armed for."""
        with self._lock:
            if not self._timers.is_current(username, timer):
                # Lost the race to a newer start_quiz, or already fired.
                logger.debug("Ignoring stale session timer for %s", username)
                return
            self._timers.discard(username, timer)
            record = self._users.get(username)
            if record is not None:
                record.reset_attempt()
                record.quiz_active = False
        logger.info("Quiz session expired for %s", username)
