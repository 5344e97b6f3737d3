"""Application entry point for the quiz service.

Usage:
    python app_main.py          # load questions.csv and serve the API
    python app_main.py --cli    # interactive client against a running server
"""

from __future__ import annotations

import argparse
import sys

from quiz_service.cli.quiz_client import QuizClient, run_cli
from quiz_service.config.settings import Settings, get_settings
from quiz_service.core.errors import QuestionImportError
from quiz_service.core.question_importer import load_questions_from_csv
from quiz_service.core.quiz_engine import QuizEngine
from quiz_service.core.services.session_store import SessionStore
from quiz_service.server.api_server import start_api_server
from quiz_service.utils.logging_config import configure_logging


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quiz_service",
        description="Timed multiple-choice quiz service with percentile stats.",
    )
    parser.add_argument("--cli", action="store_true", help="run the interactive CLI client")
    parser.add_argument("--base-url", default=None, help="API base URL for --cli (default: API_BASE_URL)")
    return parser.parse_args(argv)


def serve(settings: Settings) -> int:
    """Load the question set and run the API until interrupted."""
    logger = configure_logging(settings.effective_log_level, settings.LOG_FILE_PATH)
    logger.info("Starting quiz service (%s)…", settings.ENV)

    try:
        imported = load_questions_from_csv(settings.QUESTIONS_FILE_PATH)
    except QuestionImportError as exc:
        logger.error("Error reading questions: %s", exc)
        return 1

    engine = QuizEngine(session_timeout_seconds=settings.QUIZ_TIMEOUT_SECONDS)
    try:
        engine.load_questions(imported.questions)
    except ValueError as exc:
        logger.error("Invalid question set in %s: %s", imported.source_path, exc)
        return 1

    thread = start_api_server(
        engine,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        session_store=SessionStore(max_age_seconds=settings.SESSION_MAX_AGE_SECONDS),
        log_level=settings.effective_log_level.lower(),
    )
    logger.info("Server is running on %s:%d", settings.SERVER_HOST, settings.SERVER_PORT)
    try:
        thread.join()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        engine.shutdown()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    if args.cli:
        configure_logging("WARNING")
        with QuizClient(base_url=args.base_url or settings.API_BASE_URL) as client:
            run_cli(client)
        return 0
    return serve(settings)


if __name__ == "__main__":
    sys.exit(main())
