"""Quiz-related constants shared across the engine, server and CLI."""

OPTION_COUNT: int = 3
SESSION_TIMEOUT_SECONDS: int = 10 * 60
DEFAULT_QUESTIONS_FILE: str = "questions.csv"
STATS_MESSAGE_TEMPLATE: str = (
    "Your score is {score} and that is {percentage:.2f}% better than other users' scores."
)
