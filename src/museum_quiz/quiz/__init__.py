"""Sequential multiple-choice quiz: controller, bank loading and front ends."""

from .audio import AudioCue, CallableCue, ConsoleBellCue, SilentCue
from .bank import (
    QuestionBankError,
    load_question_bank,
    load_sample_bank,
    parse_questions,
)
from .controller import QuizController
from .models import (
    EmptyQuestionBankError,
    OptionVisualState,
    Phase,
    Question,
    QuizError,
    QuizSession,
    QuizStateError,
    QuizSummary,
)
from .progress import ProgressAnimator
from .session import QuizRunResult, parse_session_command, run_quiz_session

__all__ = [
    "AudioCue",
    "CallableCue",
    "ConsoleBellCue",
    "SilentCue",
    "QuestionBankError",
    "load_question_bank",
    "load_sample_bank",
    "parse_questions",
    "QuizController",
    "EmptyQuestionBankError",
    "OptionVisualState",
    "Phase",
    "Question",
    "QuizError",
    "QuizSession",
    "QuizStateError",
    "QuizSummary",
    "ProgressAnimator",
    "QuizRunResult",
    "parse_session_command",
    "run_quiz_session",
]
