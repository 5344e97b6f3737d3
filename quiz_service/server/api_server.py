"""FastAPI server that exposes the quiz endpoints."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import uvicorn

from quiz_service.constants.about import APP_NAME, APP_VERSION
from quiz_service.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    SESSION_COOKIE_NAME,
)
from quiz_service.core.errors import (
    InvalidCredentialsError,
    InvalidQuestionIndexError,
    NoStatsForUserError,
    QuizCompleteError,
    QuizNotStartedError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from quiz_service.core.markdown_renderer import renderer
from quiz_service.core.quiz_engine import QuizEngine
from quiz_service.core.services.auth_service import AuthService
from quiz_service.core.services.session_store import SessionStore
from quiz_service.utils.validators import validate_answer_payload

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


class CredentialsPayload(BaseModel):
    """Payload schema for registration and login."""

    username: str
    password: str


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    question_index: int
    answer: int


def _extract_token(request: Request) -> str | None:
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    if authorization.lower().startswith(_BEARER_PREFIX):
        return authorization[len(_BEARER_PREFIX):].strip() or None
    return None


def _get_engine_dependency(engine: QuizEngine):
    def dependency() -> QuizEngine:
        return engine

    return dependency


def _get_username_dependency(session_store: SessionStore):
    def dependency(request: Request) -> str:
        username = session_store.resolve(_extract_token(request))
        if username is None:
            logger.warning("Unauthorized request to %s", request.url.path)
            raise HTTPException(status_code=401, detail="Unauthorized")
        return username

    return dependency


def create_api_app(
    engine: QuizEngine,
    auth_service: AuthService | None = None,
    session_store: SessionStore | None = None,
) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz engine."""
    auth_service = auth_service or AuthService(engine)
    session_store = session_store or SessionStore()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        engine.shutdown()

    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, lifespan=lifespan)
    engine_dep = _get_engine_dependency(engine)
    current_username = _get_username_dependency(session_store)

    @app.post("/register", status_code=201)
    def register_user(payload: CredentialsPayload) -> dict[str, object]:
        try:
            record = auth_service.register_user(payload.username, payload.password)
        except UserAlreadyExistsError as exc:
            raise HTTPException(status_code=409, detail="User already exists") from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"message": "User registered successfully", "user_id": record.user_id}

    @app.post("/login")
    def login_user(payload: CredentialsPayload, response: Response) -> dict[str, object]:
        try:
            record = auth_service.authenticate(payload.username, payload.password)
        except InvalidCredentialsError as exc:
            raise HTTPException(status_code=401, detail="Invalid username or password") from exc

        token = session_store.create(record.username)
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=token,
            max_age=int(session_store.max_age_seconds),
            samesite="strict",
            httponly=True,
        )
        return {
            "message": "Login successful",
            "session_token": token,
            "username": record.username,
            "user_id": record.user_id,
        }

    @app.post("/logout")
    def logout_user(
        request: Request,
        response: Response,
        username: str = Depends(current_username),
    ) -> dict[str, object]:
        session_store.revoke(_extract_token(request))
        response.delete_cookie(SESSION_COOKIE_NAME)
        logger.info("User logged out: %s", username)
        return {"message": "Logout successful"}

    @app.get("/questions")
    def get_questions(manager: QuizEngine = Depends(engine_dep)) -> list[dict[str, object]]:
        return [
            {"question_id": question.id, "question": question.text, "options": list(question.options)}
            for question in manager.get_questions()
        ]

    @app.post("/quiz/start")
    def start_quiz(
        username: str = Depends(current_username),
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object]:
        try:
            manager.start_quiz(username)
        except UserNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"status": "quiz started", "next_endpoint": "/quiz/next"}

    @app.get("/quiz/next", response_model=None)
    def next_question(
        username: str = Depends(current_username),
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object] | JSONResponse:
        try:
            question = manager.get_next_question(username)
        except QuizCompleteError:
            return JSONResponse(
                status_code=410,
                content={"status": "quiz complete", "results_endpoint": "/quiz/results"},
            )
        except QuizNotStartedError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {
            "question_id": question.id,
            # Catalog ids are 1-based positions.
            "question_index": question.id - 1,
            "question": question.text,
            "question_html": renderer.render_fragment(question.text),
            "options": list(question.options),
            "options_html": [renderer.render_inline(option) for option in question.options],
        }

    @app.post("/quiz/submit")
    def submit_answer(
        payload: AnswerPayload,
        username: str = Depends(current_username),
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object]:
        try:
            validate_answer_payload(payload.question_index, payload.answer, manager.get_questions())
            correct = manager.submit_answer(username, payload.question_index, payload.answer)
        except (InvalidQuestionIndexError, ValidationError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except UserNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"correct": correct, "message": "Correct answer" if correct else "Wrong answer"}

    @app.get("/quiz/results")
    def get_results(
        username: str = Depends(current_username),
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object]:
        try:
            score = manager.get_results(username)
        except QuizNotStartedError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"score": score}

    @app.get("/quiz/stats")
    def get_stats(
        username: str = Depends(current_username),
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object]:
        try:
            report = manager.get_stats(username)
        except NoStatsForUserError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {
            "message": report.message,
            "score": report.score,
            "better_count": report.better_count,
            "percentage": round(report.percentage, 2),
            "users": [{"username": row.username, "score": row.score} for row in report.users],
        }

    @app.get("/health")
    def health(manager: QuizEngine = Depends(engine_dep)) -> dict[str, object]:
        question_count = manager.get_question_count()
        return {
            "status": "ok" if question_count else "degraded",
            "questions_loaded": question_count,
            "registered_users": manager.get_user_count(),
            "active_sessions": manager.active_session_count(),
            "login_sessions": len(session_store),
        }

    return app


def start_api_server(
    engine: QuizEngine,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    session_store: SessionStore | None = None,
    log_level: str = "info",
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(engine, session_store=session_store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=log_level)
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
