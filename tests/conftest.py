"""Shared fixtures for the quiz service tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from quiz_service.core.models import Question
from quiz_service.core.quiz_engine import QuizEngine
from quiz_service.core.services.auth_service import AuthService
from quiz_service.utils.password_hash import hash_password


class FakeTimer:
    """Stand-in for ``threading.Timer`` that only fires when told to."""

    def __init__(self, interval: float, function: Callable[[], object]) -> None:
        self.interval = interval
        self.function = function
        self.daemon = False
        self.name = ""
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function()


class FakeTimerFactory:
    """Records every timer the registry creates."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[[], object]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


def make_questions() -> list[Question]:
    return [
        Question(id=0, text="What is 2+2?", options=("3", "4", "5"), correct_option=1),
        Question(id=0, text="What is the capital of France?", options=("Paris", "Berlin", "Madrid"), correct_option=0),
        Question(id=0, text="Which planet is red?", options=("Venus", "Jupiter", "Mars"), correct_option=2),
    ]


@pytest.fixture
def questions() -> list[Question]:
    return make_questions()


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def engine(timer_factory: FakeTimerFactory) -> QuizEngine:
    quiz_engine = QuizEngine(session_timeout_seconds=600, timer_factory=timer_factory)
    quiz_engine.load_questions(make_questions())
    yield quiz_engine
    quiz_engine.shutdown()


@pytest.fixture
def auth_service(engine: QuizEngine) -> AuthService:
    # Minimum bcrypt cost keeps the suite fast.
    return AuthService(engine, hasher=lambda password: hash_password(password, rounds=4))
