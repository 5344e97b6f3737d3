"""Tests for the terminal client against an in-process server."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from quiz_service.cli.quiz_client import QuizClient, QuizClientError, run_cli
from quiz_service.core.quiz_engine import QuizEngine
from quiz_service.core.services.auth_service import AuthService
from quiz_service.core.services.session_store import SessionStore
from quiz_service.server.api_server import create_api_app

PASSWORD = "Secret#123"


@pytest.fixture
def quiz_client(engine: QuizEngine, auth_service: AuthService) -> Iterator[QuizClient]:
    app = create_api_app(engine, auth_service=auth_service, session_store=SessionStore())
    with QuizClient(http_client=TestClient(app)) as client:
        yield client


def _scripted(answers: list[str]):
    pending = iter(answers)

    def input_fn(prompt: str) -> str:
        return next(pending)

    return input_fn


def test_client_plays_a_full_quiz(quiz_client: QuizClient) -> None:
    assert quiz_client.register("alice", PASSWORD)
    quiz_client.login("alice", PASSWORD)
    quiz_client.start_quiz()

    seen = []
    while (question := quiz_client.next_question()) is not None:
        seen.append(question["question_index"])
        quiz_client.submit_answer(question["question_index"], 0)

    assert seen == [0, 1, 2]
    # Only the capital question has option 0 as its answer.
    assert quiz_client.results() == 1


def test_client_raises_on_error_status(quiz_client: QuizClient) -> None:
    quiz_client.register("alice", PASSWORD)

    with pytest.raises(QuizClientError) as excinfo:
        quiz_client.register("alice", PASSWORD)

    assert excinfo.value.status_code == 409
    assert excinfo.value.detail == "User already exists"


def test_client_requires_login_for_quiz(quiz_client: QuizClient) -> None:
    with pytest.raises(QuizClientError) as excinfo:
        quiz_client.start_quiz()

    assert excinfo.value.status_code == 401


def test_run_cli_start_then_score(quiz_client: QuizClient) -> None:
    output: list[str] = []
    inputs = _scripted(["start", "alice", PASSWORD, "2", "abc", "1", "3", "score", "exit"])

    run_cli(quiz_client, input_fn=inputs, output_fn=output.append)

    assert "Please enter a number between 1 and 3." in output
    assert output.count("Correct answer") == 3
    assert "Quiz complete! Your score is 3. Use the score command to see your stats." in output
    assert "Your score is 3 and that is 0.00% better than other users' scores." in output
    assert output[-1] == "Exiting the Quiz App. Goodbye!"


def test_run_cli_reports_server_errors(quiz_client: QuizClient) -> None:
    output: list[str] = []

    run_cli(quiz_client, input_fn=_scripted(["start", "alice", "weak", "3"]), output_fn=output.append)

    assert any(line.startswith("Registration failed (400)") for line in output)


def test_run_cli_rejects_unknown_commands(quiz_client: QuizClient) -> None:
    output: list[str] = []

    run_cli(quiz_client, input_fn=_scripted(["dance", "exit"]), output_fn=output.append)

    assert "Invalid command. Please try again." in output


def test_run_cli_reports_unreachable_server() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://quiz.test", transport=httpx.MockTransport(refuse))
    output: list[str] = []

    with QuizClient(http_client=http) as client:
        run_cli(client, input_fn=_scripted(["score", "exit"]), output_fn=output.append)

    assert "Could not reach the quiz server: connection refused" in output
