"""Service holding the ordered, read-only set of quiz questions."""

from __future__ import annotations

from collections.abc import Iterable

from quiz_service.constants.quiz_constants import OPTION_COUNT
from quiz_service.core.models import Question


class QuestionCatalog:
    """Immutable ordered sequence of questions shared by every session."""

    def __init__(self, questions: Iterable[Question] = (), option_count: int = OPTION_COUNT) -> None:
        self._option_count = option_count
        prepared: list[Question] = []
        for position, question in enumerate(questions, start=1):
            prepared.append(self._prepare_question(question, position))
        self._questions: tuple[Question, ...] = tuple(prepared)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    def __getitem__(self, index: int) -> Question:
        return self._questions[index]

    def get_questions(self) -> list[Question]:
        """Return the questions as a new list; the records themselves are shared."""
        return list(self._questions)

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self._questions)

    def _prepare_question(self, question: Question, position: int) -> Question:
        """Validate a question and assign its catalog id (1-based position)."""
        cleaned_text = question.text.strip()
        if not cleaned_text:
            raise ValueError(f"Question {position}: text must not be empty.")

        options = self._validate_options(question.options, position)
        if not 0 <= question.correct_option < len(options):
            raise ValueError(
                f"Question {position}: correct option must be between 0 and {len(options) - 1}."
            )

        return Question(
            id=position,
            text=cleaned_text,
            options=options,
            correct_option=question.correct_option,
        )

    def _validate_options(self, options: Iterable[str], position: int) -> tuple[str, ...]:
        cleaned = tuple(option.strip() for option in options)
        if len(cleaned) != self._option_count:
            raise ValueError(
                f"Question {position}: expected exactly {self._option_count} options, got {len(cleaned)}."
            )
        if any(not option for option in cleaned):
            raise ValueError(f"Question {position}: option text cannot be empty.")
        return cleaned
