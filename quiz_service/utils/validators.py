"""Input validation rules applied before requests reach the engine."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from quiz_service.core.errors import InvalidQuestionIndexError, ValidationError
from quiz_service.core.models import Question

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")


def validate_username(username: str) -> str:
    """Return the stripped username or raise ``ValidationError``."""
    cleaned = username.strip()
    if not cleaned:
        logger.warning("Validation failed: username is empty")
        raise ValidationError("Username cannot be empty.")
    return cleaned


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if not _UPPERCASE.search(password):
        raise ValidationError("Password must contain at least one uppercase letter.")
    if not _DIGIT.search(password):
        raise ValidationError("Password must contain at least one number.")
    if not _SPECIAL.search(password):
        raise ValidationError("Password must contain at least one special character.")


def validate_answer_payload(question_index: int, answer: int, questions: Sequence[Question]) -> None:
    """Check the index against the catalog and the answer against that question."""
    if not 0 <= question_index < len(questions):
        logger.warning("Validation failed: question index %d out of range", question_index)
        raise InvalidQuestionIndexError(question_index, len(questions))

    option_count = questions[question_index].option_count
    if not 0 <= answer < option_count:
        logger.warning("Validation failed: answer %d out of range", answer)
        raise ValidationError(f"Answer must be between 0 and {option_count - 1}.")
