"""Utilities for importing the question set from a CSV file.

File format (first row is a header and is skipped):

    Question,Option1,Option2,Option3,Answer
    What is 2+2?,1,2,4,2
    What is 3+3?,5,6,7,1

``Answer`` is the 0-based index of the correct option. Extra trailing
columns are ignored; blank rows are skipped.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from quiz_service.constants.quiz_constants import OPTION_COUNT
from quiz_service.core.errors import QuestionImportError
from quiz_service.core.models import Question

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = 1 + OPTION_COUNT + 1


@dataclass(slots=True)
class ImportedQuestions:
    """Container for the source path and the parsed questions."""

    source_path: Path
    questions: list[Question]


def load_questions_from_csv(file_path: Path | str) -> ImportedQuestions:
    file_path = Path(file_path)
    logger.info("Reading question file %s", file_path)
    try:
        with file_path.open(encoding="utf-8", newline="") as handle:
            rows = list(csv.reader(handle))
    except OSError as exc:
        logger.error("Failed to open question file %s: %s", file_path, exc)
        raise QuestionImportError(f"Failed to open file {file_path}: {exc}") from exc
    except csv.Error as exc:
        logger.error("Failed to read question file %s: %s", file_path, exc)
        raise QuestionImportError(f"Failed to read CSV file {file_path}: {exc}") from exc

    if not rows:
        logger.warning("Question file %s is empty", file_path)
        raise QuestionImportError("CSV file is empty.")

    questions = parse_rows(rows[1:], first_line=2)
    if not questions:
        raise QuestionImportError("CSV file did not contain any questions.")

    logger.info("Question file %s processed: %d questions", file_path, len(questions))
    return ImportedQuestions(source_path=file_path, questions=questions)


def parse_rows(rows: list[list[str]], first_line: int = 1) -> list[Question]:
    questions: list[Question] = []
    for line_number, record in enumerate(rows, start=first_line):
        if not any(cell.strip() for cell in record):
            continue
        questions.append(_parse_record(record, line_number, position=len(questions) + 1))
    return questions


def _parse_record(record: list[str], line_number: int, position: int) -> Question:
    if len(record) < _REQUIRED_COLUMNS:
        raise QuestionImportError(
            f"Invalid record on line {line_number}: expected {_REQUIRED_COLUMNS} columns, got {len(record)}."
        )

    raw_answer = record[OPTION_COUNT + 1].strip()
    try:
        answer = int(raw_answer)
    except ValueError as exc:
        raise QuestionImportError(
            f"Invalid answer format on line {line_number}: '{raw_answer}' is not an integer."
        ) from exc

    logger.debug("Processed record on line %d", line_number)
    return Question(
        id=position,
        text=record[0].strip(),
        options=tuple(cell.strip() for cell in record[1 : OPTION_COUNT + 1]),
        correct_option=answer,
    )
