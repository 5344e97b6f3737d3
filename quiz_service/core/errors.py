"""Exceptions raised by the quiz engine and its collaborators."""

from __future__ import annotations


class QuizServiceError(Exception):
    """Base class for every error the service raises on purpose."""


class UserNotFoundError(QuizServiceError):
    """Raised when a username has no record."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User '{username}' not found.")
        self.username = username


class UserAlreadyExistsError(QuizServiceError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User '{username}' already exists.")
        self.username = username


class InvalidCredentialsError(QuizServiceError):
    """Raised when a login attempt does not match a stored credential."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class QuizNotStartedError(QuizServiceError):
    """Raised when an operation needs an active attempt and there is none."""

    def __init__(self, username: str) -> None:
        super().__init__("Quiz not started.")
        self.username = username


class QuizCompleteError(QuizServiceError):
    """Signals that every question of the attempt has been issued."""

    def __init__(self, username: str) -> None:
        super().__init__("Quiz complete.")
        self.username = username


class InvalidQuestionIndexError(QuizServiceError, IndexError):
    """Raised when a question index falls outside the catalog."""

    def __init__(self, question_index: int, question_count: int) -> None:
        super().__init__(
            f"Question index {question_index} is out of range (0-{question_count - 1})."
        )
        self.question_index = question_index
        self.question_count = question_count


class NoStatsForUserError(QuizServiceError):
    """Raised when a ranking cannot be computed for the user."""

    def __init__(self, username: str) -> None:
        super().__init__("No stats available for user.")
        self.username = username


class ValidationError(QuizServiceError, ValueError):
    """Raised when caller-supplied input breaks a validation rule."""


class QuestionImportError(QuizServiceError):
    """Raised when a question file cannot be parsed."""
