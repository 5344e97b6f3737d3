"""Static metadata describing the quiz service."""

APP_NAME = "QuizService"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = (
    "Timed multiple-choice quiz service. Users register, log in, work through a "
    "fixed question set within a session window and compare their score with "
    "everyone else's."
)
