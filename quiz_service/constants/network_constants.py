"""Network configuration constants for the quiz service."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8080
DEFAULT_API_BASE_URL: str = "http://localhost:8080"
SESSION_COOKIE_NAME: str = "quiz-session"
SESSION_MAX_AGE_SECONDS: int = 60 * 60
HTTP_TIMEOUT_SECONDS: float = 10.0
