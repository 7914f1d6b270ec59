from __future__ import annotations

import asyncio

from textual.binding import Binding

from fixtures import make_questions
from museum_quiz.quiz.controller import QuizController
from museum_quiz.quiz.models import MAX_OPTIONS, Phase, Question, QuizSummary
from museum_quiz.quiz.progress import ProgressAnimator
from museum_quiz.quiz.session import FAIL_HEADLINE, PASS_HEADLINE
from museum_quiz.quiz.view import QuestionView, QuizApp, SummaryView


def make_app(*answers: str, clock=None) -> QuizApp:
    questions = make_questions(*answers)
    kwargs = {"clock": clock} if clock is not None else {}
    animator = ProgressAnimator(len(questions), **kwargs)
    return QuizApp(QuizController(questions, animator=animator))


def test_select_and_advance_through_quiz() -> None:
    app = make_app("B", "C")

    assert app.next_question() is False
    assert app.select_option(2) is True
    assert app.select_option(1) is False
    assert app.controller.score == 1
    assert app.next_question() is True
    assert app.controller.current_index == 1

    assert app.select_option(9) is False
    assert app.select_option(1) is True
    assert app.next_question() is True
    assert app.controller.phase is Phase.COMPLETED
    assert app.select_option(1) is False


def test_actions_and_restart() -> None:
    app = make_app("A")
    app.action_select(1)
    app.action_next()
    assert app.controller.phase is Phase.COMPLETED

    app.action_restart()
    assert app.controller.phase is Phase.IN_PROGRESS
    assert app.controller.score == 0


def test_tick_progress_samples_animator(clock) -> None:
    app = make_app("A", "A", clock=clock)
    app.select_option(1)
    app.next_question()
    clock.advance(0.5)
    assert app.tick_progress() == 0.5
    clock.advance(1)
    assert app.tick_progress() == 1.0


def test_question_view_labels_and_classes() -> None:
    controller = QuizController(make_questions("B"))
    view = QuestionView(controller)
    assert view.option_label(1, "A") == "1) A"
    assert view.option_class("A") == "neutral"

    controller.submit_answer("A")
    assert view.option_class("B") == "correct"
    assert view.option_class("A") == "incorrect"
    assert view.option_label(2, "B").endswith("✔")
    assert view.option_label(1, "A").endswith("✘")


def test_summary_view_headline() -> None:
    assert SummaryView(QuizSummary(3, 5)).headline == PASS_HEADLINE
    assert SummaryView(QuizSummary(2, 4)).headline == FAIL_HEADLINE


def test_digit_bindings_cover_every_allowed_option() -> None:
    keys = {
        binding.key
        for binding in QuizApp.BINDINGS
        if isinstance(binding, Binding)
    }
    assert keys == {str(n) for n in range(1, MAX_OPTIONS + 1)}


def test_fifth_option_is_reachable_from_the_keyboard() -> None:
    question = Question(
        id="q1",
        prompt="Pick the last one",
        options=("a", "b", "c", "d", "e"),
        correct_option="e",
    )
    app = QuizApp(QuizController([question]))

    async def drive() -> None:
        async with app.run_test() as pilot:
            await pilot.press("5")
            await pilot.pause()

    asyncio.run(drive())

    assert app.controller.answers_locked
    assert app.controller.score == 1
