"""Textual front end for the quiz controller."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.widget import Widget
from textual.widgets import Button, ProgressBar, Static

from .controller import QuizController
from .models import MAX_OPTIONS, OptionVisualState, Phase, QuizSummary
from .session import FAIL_HEADLINE, PASS_HEADLINE, RETRY_LABEL

_OPTION_CLASSES = {
    OptionVisualState.CORRECT_HIGHLIGHT: "correct",
    OptionVisualState.INCORRECT_HIGHLIGHT: "incorrect",
    OptionVisualState.NEUTRAL: "neutral",
}


class QuizApp(App):
    CSS = """
#stage { padding: 1 2; }
#progress { margin: 1 2; }
#options Button { width: 100%; margin: 1 0 0 0; }
#options Button.correct { background: $success; }
#options Button.incorrect { background: $error; }
#next, #restart { margin-top: 1; width: 100%; }
.headline { text-style: bold; content-align: center middle; }
"""
    BINDINGS = [
        *(
            Binding(str(number), f"select({number})", f"Option {number}")
            for number in range(1, MAX_OPTIONS + 1)
        ),
        ("n", "next", "Next"),
        ("r", "restart", "Restart"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, controller: QuizController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield ProgressBar(
            total=self.controller.total_questions,
            show_eta=False,
            id="progress",
        )
        with Container(id="stage"):
            yield self._stage_view()

    def on_mount(self) -> None:
        self.set_interval(1 / 30, self.tick_progress)

    # Pure helpers driving the controller (testable without running the App)
    def select_option(self, number: int) -> bool:
        controller = self.controller
        if controller.phase is Phase.COMPLETED or controller.answers_locked:
            return False
        options = controller.current_question.options
        if not 1 <= number <= len(options):
            return False
        controller.submit_answer(options[number - 1])
        self._update_stage()
        return True

    def next_question(self) -> bool:
        if not self.controller.can_advance:
            return False
        self.controller.advance()
        self._update_stage()
        return True

    def restart_quiz(self) -> None:
        self.controller.restart()
        self._update_stage()

    def tick_progress(self) -> float:
        value = self.controller.progress.value()
        if self.is_running:
            self.query_one("#progress", ProgressBar).update(progress=value)
        return value

    def action_select(self, number: int) -> None:
        self.select_option(number)

    def action_next(self) -> None:
        self.next_question()

    def action_restart(self) -> None:
        self.restart_quiz()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id or ""
        if bid.startswith("option-"):
            self.select_option(int(bid.split("-", 1)[1]))
        elif bid == "next":
            self.next_question()
        elif bid == "restart":
            self.restart_quiz()

    def _stage_view(self) -> Widget:
        if self.controller.phase is Phase.COMPLETED:
            return SummaryView(self.controller.summary())
        return QuestionView(self.controller)

    def _update_stage(self) -> None:
        if not self.is_running:
            return
        stage = self.query_one("#stage", Container)
        stage.remove_children()
        stage.mount(self._stage_view())


class QuestionView(Widget):
    """The current question, its options and the Next button once answered."""

    DEFAULT_CSS = "QuestionView { height: auto; }"

    def __init__(self, controller: QuizController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        controller = self.controller
        question = controller.current_question
        yield Static(
            f"{controller.current_index + 1} / {controller.total_questions}",
            id="counter",
        )
        yield Static(question.prompt, id="prompt")
        with Vertical(id="options"):
            for number, option in enumerate(question.options, start=1):
                yield Button(
                    self.option_label(number, option),
                    id=f"option-{number}",
                    classes=self.option_class(option),
                    disabled=controller.answers_locked,
                )
        if controller.can_advance:
            yield Button("Next", id="next", variant="primary")

    def option_class(self, option: str) -> str:
        return _OPTION_CLASSES[self.controller.option_visual_state(option)]

    def option_label(self, number: int, option: str) -> str:
        state = self.controller.option_visual_state(option)
        if state is OptionVisualState.CORRECT_HIGHLIGHT:
            return f"{number}) {option}  ✔"
        if state is OptionVisualState.INCORRECT_HIGHLIGHT:
            return f"{number}) {option}  ✘"
        return f"{number}) {option}"


class SummaryView(Widget):
    """Completion screen with the score and a retry button."""

    DEFAULT_CSS = "SummaryView { height: auto; }"

    def __init__(self, summary: QuizSummary) -> None:
        super().__init__()
        self.summary = summary

    @property
    def headline(self) -> str:
        return PASS_HEADLINE if self.summary.passing else FAIL_HEADLINE

    def compose(self) -> ComposeResult:
        yield Static(self.headline, classes="headline")
        yield Static(
            f"{self.summary.score} / {self.summary.total}", id="score"
        )
        yield Button(RETRY_LABEL, id="restart", variant="success")
