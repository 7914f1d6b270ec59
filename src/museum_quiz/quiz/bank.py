"""Question bank loading and validation.

Banks are JSON documents (a list of records, or an object with a
``questions`` list) or JSONL files with one record per line. Each record
needs ``question`` (``prompt`` is accepted too), ``options`` and
``correct_option``; ``id`` defaults to the 1-based position. A question may
have at most nine options, one per digit key.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

from .models import MAX_OPTIONS, Question, QuizError

SAMPLE_PACKAGE = "museum_quiz.quiz.data"
SAMPLE_FILENAME = "questions.json"


class QuestionBankError(QuizError):
    """Raised when a question bank cannot be read or is malformed."""


def read_jsonl(path: Path) -> List[dict]:
    data: List[dict] = []
    for number, line in enumerate(_read_text(path).split("\n"), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            data.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise QuestionBankError(
                f"{path}:{number}: invalid JSON ({exc.msg})."
            ) from exc
    return data


def parse_question(record: Mapping[str, Any], position: int) -> Question:
    """Build a :class:`Question` from a raw bank record."""

    if not isinstance(record, Mapping):
        raise QuestionBankError(
            f"Question #{position} must be an object, "
            f"found {type(record).__name__}."
        )
    label = f"Question #{position}"
    raw_id = record.get("id")
    identifier = "" if raw_id is None else str(raw_id).strip()
    identifier = identifier or str(position)

    prompt = record.get("question", record.get("prompt"))
    if not isinstance(prompt, str) or not prompt.strip():
        raise QuestionBankError(f"{label} is missing its question text.")

    options = record.get("options")
    if not isinstance(options, Sequence) or isinstance(options, (str, bytes)):
        raise QuestionBankError(f"{label} must list its options.")
    if not all(isinstance(option, str) for option in options):
        raise QuestionBankError(f"{label} options must be strings.")
    if len(options) > MAX_OPTIONS:
        raise QuestionBankError(
            f"{label} has {len(options)} options; at most {MAX_OPTIONS} "
            "are supported."
        )

    correct = record.get("correct_option")
    if not isinstance(correct, str):
        raise QuestionBankError(f"{label} is missing 'correct_option'.")

    try:
        return Question(
            id=identifier,
            prompt=prompt.strip(),
            options=tuple(options),
            correct_option=correct,
        )
    except ValueError as exc:
        raise QuestionBankError(f"{label}: {exc}") from exc


def parse_questions(records: Iterable[Mapping[str, Any]]) -> List[Question]:
    questions = [
        parse_question(record, position)
        for position, record in enumerate(records, start=1)
    ]
    seen: set[str] = set()
    for question in questions:
        if question.id in seen:
            raise QuestionBankError(f"Duplicate question id '{question.id}'.")
        seen.add(question.id)
    return questions


def load_question_bank(path: Path) -> List[Question]:
    """Load and validate the bank stored at ``path``."""

    path = Path(path)
    if not path.is_file():
        raise QuestionBankError(f"Question bank not found: {path}")
    if path.suffix.lower() == ".jsonl":
        return parse_questions(read_jsonl(path))
    try:
        payload = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise QuestionBankError(f"{path}: invalid JSON ({exc.msg}).") from exc
    return parse_questions(_records_from(payload, source=str(path)))


def load_sample_bank() -> List[Question]:
    """Return the museum questions bundled with the package."""

    resource = resources.files(SAMPLE_PACKAGE).joinpath(SAMPLE_FILENAME)
    payload = json.loads(resource.read_text(encoding="utf-8"))
    return parse_questions(_records_from(payload, source=SAMPLE_FILENAME))


def _records_from(payload: object, *, source: str) -> List[Any]:
    if isinstance(payload, Mapping):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        raise QuestionBankError(
            f"{source}: expected a list of questions or a 'questions' list."
        )
    return payload


def _read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise QuestionBankError(
            f"{path}: not valid UTF-8 (byte {exc.start})."
        ) from exc
    except OSError as exc:
        raise QuestionBankError(
            f"Cannot read question bank {path}: {exc}"
        ) from exc
