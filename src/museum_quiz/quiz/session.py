"""Rich-powered prompt loop for playing a quiz in the terminal.

The loop renders the current question with its numbered options, reads one
command per prompt, and forwards it to a :class:`QuizController`. All quiz
state lives in the controller; this module only turns commands into
controller calls and controller queries into Rich renderables.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich import box
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from .controller import QuizController
from .models import OptionVisualState, Phase, QuizSummary
from .progress import ProgressAnimator

InputProvider = Callable[[], str]
ExitAction = Literal["completed", "quit"]

PASS_HEADLINE = "You made it!"
FAIL_HEADLINE = "Oh well, maybe next time..."
RETRY_LABEL = "Try again"

_FRAME_SECONDS = 1 / 30

_MARKS = {
    OptionVisualState.CORRECT_HIGHLIGHT: ("✔", "bold green"),
    OptionVisualState.INCORRECT_HIGHLIGHT: ("✘", "bold red"),
    OptionVisualState.NEUTRAL: (" ", ""),
}


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["select", "next", "restart", "quit"]
    number: Optional[int] = None


@dataclass(frozen=True)
class QuizRunResult:
    """Return value from ``run_quiz_session``.

    ``summary`` holds the most recent completed attempt, or ``None`` when the
    player quit before finishing any attempt.
    """

    summary: Optional[QuizSummary]
    attempts: int
    exit_action: ExitAction


def parse_session_command(raw: str | None) -> SessionCommand | None:
    """Parse raw user input into a structured command."""

    if raw is None:
        return None
    text = raw.strip().lower()
    if not text:
        return None
    if text in {"n", "next"}:
        return SessionCommand("next")
    if text in {"r", "restart", "retry"}:
        return SessionCommand("restart")
    if text in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if text.isdigit():
        return SessionCommand("select", int(text))
    return None


def run_quiz_session(
    controller: QuizController,
    console: Console,
    input_provider: InputProvider,
) -> QuizRunResult:
    """Play ``controller`` interactively until the player quits."""

    attempts = 1
    last_summary: QuizSummary | None = None

    while True:
        if controller.phase is Phase.COMPLETED:
            last_summary = controller.summary()
            _render_summary(console, controller, last_summary)
        else:
            _render_question(console, controller)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            break
        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            break
        if command.type == "restart":
            attempts += 1
        _apply_command(command, controller, console)

    exit_action: ExitAction = (
        "completed" if controller.phase is Phase.COMPLETED else "quit"
    )
    return QuizRunResult(
        summary=last_summary,
        attempts=attempts,
        exit_action=exit_action,
    )


def _apply_command(
    command: SessionCommand,
    controller: QuizController,
    console: Console,
) -> None:
    if command.type == "select" and command.number is not None:
        _select(command.number, controller, console)
    elif command.type == "next":
        if not controller.can_advance:
            console.print("[yellow]Answer the question first.[/]")
            return
        controller.advance()
        _play_progress(console, controller.progress)
    elif command.type == "restart":
        controller.restart()
        console.print(f"[bold]{RETRY_LABEL}![/]")
        _play_progress(console, controller.progress)


def _select(number: int, controller: QuizController, console: Console) -> None:
    if controller.phase is Phase.COMPLETED:
        console.print("[yellow]The quiz is over. Press r to try again.[/]")
        return
    if controller.answers_locked:
        console.print("[yellow]Already answered. Press n to continue.[/]")
        return
    options = controller.current_question.options
    if not 1 <= number <= len(options):
        console.print(f"[red]'{number}' is not a valid option.[/red]")
        return
    option = options[number - 1]
    controller.submit_answer(option)
    if controller.option_visual_state(option) is (
        OptionVisualState.CORRECT_HIGHLIGHT
    ):
        console.print("[bold green]Correct![/]")
    else:
        console.print(
            "[bold red]Incorrect.[/] The answer is "
            f"[bold]{controller.current_question.correct_option}[/]."
        )


def _progress_bar(animator: ProgressAnimator) -> ProgressBar:
    return ProgressBar(
        total=float(animator.total),
        completed=animator.value(),
        complete_style="cyan",
        finished_style="green",
    )


def _play_progress(console: Console, animator: ProgressAnimator) -> None:
    if not animator.is_animating():
        return
    with Live(
        _progress_bar(animator),
        console=console,
        transient=True,
        refresh_per_second=30,
    ) as live:
        while animator.is_animating():
            time.sleep(_FRAME_SECONDS)
            live.update(_progress_bar(animator))


def _render_question(console: Console, controller: QuizController) -> None:
    question = controller.current_question
    header = Text.assemble(
        (f"Question {controller.current_index + 1}", "bold cyan"),
        (f" / {controller.total_questions}", "dim"),
    )
    console.print()
    console.print(_progress_bar(controller.progress))
    console.rule(header)
    console.print(Text(question.prompt, style="bold"))

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Option")
    table.add_column("", justify="center", width=3)
    for number, option in enumerate(question.options, start=1):
        mark, style = _MARKS[controller.option_visual_state(option)]
        table.add_row(str(number), Text(option, style=style), Text(mark, style))
    console.print(table)

    if controller.can_advance:
        hint = "Commands: n (next), r (restart), q (quit)"
    else:
        hint = (
            f"Commands: 1-{len(question.options)} (answer), "
            "r (restart), q (quit)"
        )
    console.print(
        Text(f"Score {controller.score} | {hint}", style="dim")
    )


def _render_summary(
    console: Console, controller: QuizController, summary: QuizSummary
) -> None:
    style = "green" if summary.passing else "red"
    headline = PASS_HEADLINE if summary.passing else FAIL_HEADLINE
    body = Group(
        Text(headline, style=f"bold {style}", justify="center"),
        Text.assemble(
            (str(summary.score), f"bold {style}"),
            (f" / {summary.total}", ""),
            justify="center",
        ),
        Text(
            f"r: {RETRY_LABEL}    q: quit",
            style="dim",
            justify="center",
        ),
    )
    console.print()
    console.print(_progress_bar(controller.progress))
    console.print(
        Panel(body, title="Quiz Summary", border_style=style, expand=False)
    )
