"""Registration and credential checks in front of the quiz engine."""

from __future__ import annotations

import logging
from collections.abc import Callable

from quiz_service.core.errors import InvalidCredentialsError, UserAlreadyExistsError, UserNotFoundError
from quiz_service.core.models import UserRecord
from quiz_service.core.quiz_engine import QuizEngine
from quiz_service.utils.password_hash import compare_password, hash_password
from quiz_service.utils.validators import validate_password, validate_username

logger = logging.getLogger(__name__)


class AuthService:
    """Creates user records with hashed credentials and verifies logins."""

    def __init__(
        self,
        engine: QuizEngine,
        hasher: Callable[[str], str] = hash_password,
        verifier: Callable[[str, str], bool] = compare_password,
    ) -> None:
        self._engine = engine
        self._hasher = hasher
        self._verifier = verifier

    def register_user(self, username: str, password: str) -> UserRecord:
        try:
            username = validate_username(username)
            validate_password(password)
        except ValueError as exc:
            logger.warning("User registration failed for %r: %s", username, exc)
            raise

        if self._engine.has_user(username):
            logger.warning("User registration failed: %s already exists", username)
            raise UserAlreadyExistsError(username)

        # The store re-checks under its lock; this only skips the bcrypt cost.
        record = self._engine.register_user(username, self._hasher(password))
        logger.info("User registered successfully: %s", username)
        return record

    def authenticate(self, username: str, password: str) -> UserRecord:
        # Same normalisation as registration.
        username = username.strip()
        try:
            record = self._engine.get_user(username)
        except UserNotFoundError:
            logger.warning("Authentication failed: user %s does not exist", username)
            raise InvalidCredentialsError() from None

        if not self._verifier(record.credential, password):
            logger.warning("Authentication failed: invalid password for %s", username)
            raise InvalidCredentialsError()

        logger.info("User authenticated successfully: %s", username)
        return record
