"""Interactive terminal client for the quiz HTTP API.

The client registers a user, logs in and plays through the question set,
then shows the percentile message from ``/quiz/stats``. The server must
already be running (see ``app_main.py``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from quiz_service.constants.about import APP_DESCRIPTION, APP_NAME
from quiz_service.constants.network_constants import DEFAULT_API_BASE_URL, HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class QuizClientError(Exception):
    """Raised when the server answers with an unexpected status."""

    def __init__(self, action: str, response: httpx.Response) -> None:
        detail = _error_detail(response)
        super().__init__(f"{action} failed ({response.status_code}): {detail}")
        self.status_code = response.status_code
        self.detail = detail


class QuizClient:
    """Thin wrapper around the API; the login cookie lives in the httpx jar."""

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, http_client: httpx.Client | None = None) -> None:
        self._http = http_client or httpx.Client(base_url=base_url, timeout=HTTP_TIMEOUT_SECONDS)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "QuizClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def register(self, username: str, password: str) -> str:
        response = self._http.post("/register", json={"username": username, "password": password})
        data = self._expect(response, "Registration", 201)
        return data["user_id"]

    def login(self, username: str, password: str) -> str:
        response = self._http.post("/login", json={"username": username, "password": password})
        data = self._expect(response, "Login", 200)
        token = data["session_token"]
        # Also send the token as a header in case the cookie is not kept.
        self._http.headers["Authorization"] = f"Bearer {token}"
        return token

    def start_quiz(self) -> None:
        self._expect(self._http.post("/quiz/start"), "Starting the quiz", 200)

    def next_question(self) -> dict[str, Any] | None:
        """Return the next question, or None once the quiz is complete."""
        response = self._http.get("/quiz/next")
        if response.status_code == 410:
            return None
        return self._expect(response, "Fetching the next question", 200)

    def submit_answer(self, question_index: int, answer: int) -> dict[str, Any]:
        response = self._http.post(
            "/quiz/submit",
            json={"question_index": question_index, "answer": answer},
        )
        return self._expect(response, "Submitting the answer", 200)

    def results(self) -> int:
        return self._expect(self._http.get("/quiz/results"), "Fetching results", 200)["score"]

    def stats(self) -> dict[str, Any]:
        return self._expect(self._http.get("/quiz/stats"), "Fetching stats", 200)

    @staticmethod
    def _expect(response: httpx.Response, action: str, status_code: int) -> dict[str, Any]:
        if response.status_code != status_code:
            logger.debug("%s returned %d: %s", action, response.status_code, response.text)
            raise QuizClientError(action, response)
        return response.json()


def run_cli(client: QuizClient, input_fn: InputFn = input, output_fn: OutputFn = print) -> None:
    """Menu loop: ``start`` plays a quiz, ``score`` shows stats, ``exit`` quits."""
    output_fn(APP_NAME)
    output_fn(APP_DESCRIPTION)
    while True:
        output_fn("\nAvailable commands:")
        output_fn("1. start - Start the quiz")
        output_fn("2. score - View your score and stats")
        output_fn("3. exit - Quit the quiz app")
        command = input_fn("\nEnter your command: ").strip().lower()

        try:
            if command in ("start", "1"):
                _start_quiz(client, input_fn, output_fn)
            elif command in ("score", "2"):
                _show_stats(client, output_fn)
            elif command in ("exit", "3"):
                output_fn("Exiting the Quiz App. Goodbye!")
                return
            else:
                output_fn("Invalid command. Please try again.")
        except QuizClientError as exc:
            output_fn(str(exc))
        except httpx.HTTPError as exc:
            output_fn(f"Could not reach the quiz server: {exc}")


def _start_quiz(client: QuizClient, input_fn: InputFn, output_fn: OutputFn) -> None:
    username = input_fn("Enter username: ").strip()
    password = input_fn("Enter password: ")

    output_fn("Registering a new user...")
    client.register(username, password)
    output_fn("Registration successful.")

    output_fn("Logging in...")
    client.login(username, password)
    output_fn("Login successful.")

    client.start_quiz()
    output_fn("Quiz started! Answer the questions as they appear.")
    _quiz_loop(client, input_fn, output_fn)


def _quiz_loop(client: QuizClient, input_fn: InputFn, output_fn: OutputFn) -> None:
    while True:
        question = client.next_question()
        if question is None:
            score = client.results()
            output_fn(f"Quiz complete! Your score is {score}. Use the score command to see your stats.")
            return

        output_fn(f"\nQuestion: {question['question']}")
        options = question["options"]
        for number, option in enumerate(options, start=1):
            output_fn(f"{number}. {option}")

        answer = _prompt_option(input_fn, output_fn, len(options))
        result = client.submit_answer(question["question_index"], answer)
        output_fn(result["message"])


def _prompt_option(input_fn: InputFn, output_fn: OutputFn, option_count: int) -> int:
    """Ask until the user picks a listed option; returns a 0-based index."""
    while True:
        raw = input_fn("Enter your answer: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= option_count:
            return int(raw) - 1
        output_fn(f"Please enter a number between 1 and {option_count}.")


def _show_stats(client: QuizClient, output_fn: OutputFn) -> None:
    stats = client.stats()
    output_fn("Your current stats:")
    output_fn(stats["message"])
    for row in stats.get("users", []):
        output_fn(f"  {row['username']}: {row['score']}")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or body)
    return str(body)
