"""Immutable data structures for a multiple-choice quiz session."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

# Options are picked with the digit keys 1-9.
MAX_OPTIONS = 9


class QuizError(RuntimeError):
    """Base class for quiz errors."""


class EmptyQuestionBankError(QuizError, ValueError):
    """Raised when a session is built without any questions."""


class QuizStateError(QuizError):
    """Raised when an action or query is not valid in the current state."""


class Phase(Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class OptionVisualState(Enum):
    """How an option is drawn for the current question."""

    NEUTRAL = "neutral"
    CORRECT_HIGHLIGHT = "correct"
    INCORRECT_HIGHLIGHT = "incorrect"


@dataclass(frozen=True)
class Question:
    """A multiple-choice question with a single correct option."""

    id: str
    prompt: str
    options: tuple[str, ...]
    correct_option: str

    def __post_init__(self) -> None:
        options = tuple(self.options)
        object.__setattr__(self, "options", options)
        if not options:
            raise ValueError(f"Question {self.id!r} has no options.")
        if len(set(options)) != len(options):
            raise ValueError(f"Question {self.id!r} repeats an option.")
        if self.correct_option not in options:
            raise ValueError(
                f"Question {self.id!r}: correct option "
                f"{self.correct_option!r} is not one of its options."
            )

    def is_correct(self, option: str) -> bool:
        return option == self.correct_option


@dataclass(frozen=True)
class QuizSummary:
    """Final tally shown once a session completes."""

    score: int
    total: int

    @property
    def passing(self) -> bool:
        return self.score > self.total / 2


@dataclass(frozen=True)
class QuizSession:
    """Complete quiz state; every transition produces a new instance."""

    questions: tuple[Question, ...]
    current_index: int = 0
    selected_option: str | None = None
    revealed_correct_option: str | None = None
    answers_locked: bool = False
    score: int = 0
    phase: Phase = Phase.IN_PROGRESS

    @classmethod
    def start(cls, questions) -> "QuizSession":
        bank = tuple(questions)
        if not bank:
            raise EmptyQuestionBankError(
                "A quiz session needs at least one question."
            )
        return cls(questions=bank)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def current_question(self) -> Question:
        if self.phase is Phase.COMPLETED:
            raise QuizStateError("The quiz is completed; no current question.")
        return self.questions[self.current_index]

    def answer(self, option: str) -> "QuizSession":
        """Return the session after picking ``option``; no-op once locked."""

        if self.answers_locked:
            return self
        question = self.current_question
        gained = 1 if question.is_correct(option) else 0
        return replace(
            self,
            selected_option=option,
            revealed_correct_option=question.correct_option,
            answers_locked=True,
            score=self.score + gained,
        )

    def advanced(self) -> "QuizSession":
        """Return the session moved past the answered question."""

        if self.phase is Phase.COMPLETED:
            raise QuizStateError("The quiz is already completed.")
        if not self.answers_locked:
            raise QuizStateError(
                "Cannot advance before the current question is answered."
            )
        if self.is_last_question:
            return replace(self, phase=Phase.COMPLETED)
        return replace(
            self,
            current_index=self.current_index + 1,
            selected_option=None,
            revealed_correct_option=None,
            answers_locked=False,
        )

    def restarted(self) -> "QuizSession":
        return QuizSession(questions=self.questions)

    def visual_state(self, option: str) -> OptionVisualState:
        if not self.answers_locked:
            return OptionVisualState.NEUTRAL
        if option == self.revealed_correct_option:
            return OptionVisualState.CORRECT_HIGHLIGHT
        if option == self.selected_option:
            return OptionVisualState.INCORRECT_HIGHLIGHT
        return OptionVisualState.NEUTRAL

    def check_invariants(self) -> None:
        """Raise :class:`QuizStateError` if the session is inconsistent."""

        if not self.questions:
            raise QuizStateError("Session has no questions.")
        if not 0 <= self.current_index < self.total:
            raise QuizStateError(
                f"Index {self.current_index} outside 0..{self.total - 1}."
            )
        if (self.selected_option is None) != (
            self.revealed_correct_option is None
        ):
            raise QuizStateError(
                "Selection and revealed answer must be set together."
            )
        if self.answers_locked != (self.selected_option is not None):
            raise QuizStateError("Lock flag does not match the selection.")
        if self.score < 0 or self.score > self.current_index + 1:
            raise QuizStateError(
                f"Score {self.score} impossible at index {self.current_index}."
            )
        if self.phase is Phase.COMPLETED and not (
            self.is_last_question and self.answers_locked
        ):
            raise QuizStateError(
                "Completed sessions must end on an answered last question."
            )
