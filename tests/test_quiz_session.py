from __future__ import annotations

from rich.console import Console

from fixtures import make_questions
from museum_quiz.quiz.controller import QuizController
from museum_quiz.quiz.models import Phase
from museum_quiz.quiz.progress import ProgressAnimator
from museum_quiz.quiz.session import (
    FAIL_HEADLINE,
    PASS_HEADLINE,
    SessionCommand,
    parse_session_command,
    run_quiz_session,
)


def make_provider(commands: list[str]):
    iterator = iter(commands)

    def _provider() -> str:
        return next(iterator)

    return _provider


def make_controller(*answers: str) -> QuizController:
    questions = make_questions(*answers)
    animator = ProgressAnimator(len(questions), duration_ms=0)
    return QuizController(questions, animator=animator)


def record_console() -> Console:
    return Console(record=True, width=80, force_terminal=True)


def test_parse_session_command_variants() -> None:
    assert parse_session_command("2") == SessionCommand("select", 2)
    assert parse_session_command("  Next ") == SessionCommand("next")
    assert parse_session_command("r") == SessionCommand("restart")
    assert parse_session_command("retry") == SessionCommand("restart")
    assert parse_session_command("QUIT") == SessionCommand("quit")
    assert parse_session_command(None) is None
    assert parse_session_command("") is None
    assert parse_session_command("b") is None


def test_full_run_to_passing_summary() -> None:
    console = record_console()
    controller = make_controller("B", "A", "C")
    # Options are A-D, so "2" picks B, "1" picks A and "4" picks D.
    provider = make_provider(["2", "n", "1", "n", "4", "n", "q"])

    result = run_quiz_session(controller, console, provider)

    assert result.exit_action == "completed"
    assert result.attempts == 1
    assert result.summary is not None
    assert result.summary.score == 2
    assert result.summary.passing is True
    output = console.export_text()
    assert "Correct!" in output
    assert "The answer is C" in output
    assert PASS_HEADLINE in output
    assert "2 / 3" in output


def test_failing_summary_and_restart() -> None:
    console = record_console()
    controller = make_controller("A", "A")
    provider = make_provider(["2", "n", "1", "n", "r", "q"])

    result = run_quiz_session(controller, console, provider)

    assert FAIL_HEADLINE in console.export_text()
    assert result.summary is not None
    assert result.summary.score == 1
    assert result.attempts == 2
    assert result.exit_action == "quit"
    assert controller.phase is Phase.IN_PROGRESS
    assert controller.score == 0


def test_guards_against_invalid_commands() -> None:
    console = record_console()
    controller = make_controller("A", "B")
    provider = make_provider(["n", "9", "??", "1", "2", "n", "q"])

    result = run_quiz_session(controller, console, provider)

    output = console.export_text()
    assert "Answer the question first." in output
    assert "'9' is not a valid option." in output
    assert "Unrecognized command" in output
    assert "Already answered" in output
    assert controller.current_index == 1
    assert controller.score == 1
    assert result.summary is None
    assert result.exit_action == "quit"


def test_selecting_after_completion_prompts_retry() -> None:
    console = record_console()
    controller = make_controller("A")
    provider = make_provider(["1", "n", "1", "q"])

    run_quiz_session(controller, console, provider)

    assert "The quiz is over" in console.export_text()
    assert controller.score == 1


def test_interrupted_input_ends_session() -> None:
    console = record_console()
    controller = make_controller("A")

    result = run_quiz_session(controller, console, make_provider([]))

    assert result.exit_action == "quit"
    assert "Session interrupted" in console.export_text()
