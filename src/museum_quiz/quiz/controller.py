"""Quiz session controller.

``QuizController`` owns one :class:`QuizSession` and replaces it wholesale on
every action, so each transition is atomic and the session invariants can be
checked after it. The progress animator and the audio cue hang off the
controller but carry no state the quiz logic depends on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .audio import AudioCue, SilentCue
from .models import (
    OptionVisualState,
    Phase,
    Question,
    QuizSession,
    QuizStateError,
    QuizSummary,
)
from .progress import ProgressAnimator

logger = logging.getLogger(__name__)


class QuizController:
    """Drive a sequential multiple-choice quiz."""

    def __init__(
        self,
        questions: Iterable[Question],
        *,
        audio: AudioCue | None = None,
        animator: ProgressAnimator | None = None,
    ) -> None:
        self._session = QuizSession.start(questions)
        self.audio: AudioCue = audio if audio is not None else SilentCue()
        if animator is None:
            animator = ProgressAnimator(self._session.total)
        elif animator.total != self._session.total:
            raise ValueError(
                f"Progress animator counts {animator.total} questions, "
                f"the quiz has {self._session.total}."
            )
        self.progress = animator
        logger.debug(
            "Quiz session created",
            extra={"question_count": self._session.total},
        )

    @property
    def session(self) -> QuizSession:
        return self._session

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def total_questions(self) -> int:
        return self._session.total

    @property
    def current_index(self) -> int:
        return self._session.current_index

    @property
    def current_question(self) -> Question:
        return self._session.current_question

    @property
    def answers_locked(self) -> bool:
        return self._session.answers_locked

    @property
    def can_advance(self) -> bool:
        return (
            self._session.phase is Phase.IN_PROGRESS
            and self._session.answers_locked
        )

    @property
    def progress_target(self) -> float:
        return self.progress.target

    @property
    def is_passing(self) -> bool:
        return self.summary().passing

    def summary(self) -> QuizSummary:
        if self._session.phase is not Phase.COMPLETED:
            raise QuizStateError("The quiz has not been completed yet.")
        return QuizSummary(score=self._session.score, total=self._session.total)

    def option_visual_state(self, option: str) -> OptionVisualState:
        return self._session.visual_state(option)

    def submit_answer(self, option: str) -> None:
        if self._session.answers_locked:
            logger.debug(
                "Ignored answer for locked question",
                extra={"question_index": self._session.current_index},
            )
            return
        self._play_cue()
        question = self._session.current_question
        self._commit(self._session.answer(option))
        logger.info(
            "Answer submitted",
            extra={
                "question_id": question.id,
                "selected": option,
                "correct": question.is_correct(option),
                "score": self._session.score,
            },
        )

    def advance(self) -> None:
        self._commit(self._session.advanced())
        if self._session.phase is Phase.COMPLETED:
            target = self._session.total
            logger.info(
                "Quiz completed",
                extra={
                    "score": self._session.score,
                    "total": self._session.total,
                },
            )
        else:
            target = self._session.current_index
        self.progress.retarget(target)

    def restart(self) -> None:
        self._commit(self._session.restarted())
        self.progress.retarget(0)
        logger.info("Quiz restarted")

    def _commit(self, session: QuizSession) -> None:
        session.check_invariants()
        self._session = session

    def _play_cue(self) -> None:
        try:
            self.audio.play()
        except Exception:
            logger.warning("Audio cue failed", exc_info=True)
