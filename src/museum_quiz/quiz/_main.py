"""Command handlers for playing and checking quizzes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console

from museum_quiz.core.logging import configure_logging
from museum_quiz.core.workspace import WorkspaceError, ensure_workspace

from .audio import AudioCue, CallableCue, ConsoleBellCue, SilentCue
from .bank import QuestionBankError, load_question_bank, load_sample_bank
from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    QuizConfig,
    QuizConfigError,
    load_config,
    write_template,
)
from .controller import QuizController
from .models import Question
from .progress import EASINGS, ProgressAnimator
from .session import run_quiz_session

logger = logging.getLogger(__name__)


def build_play_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="museum-quiz play",
        description="Play a multiple-choice museum quiz in the terminal.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Use the full-screen Textual interface instead of prompts.",
    )
    parser.add_argument(
        "--no-audio",
        dest="audio",
        action="store_false",
        default=None,
        help="Do not ring the terminal bell on option presses.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr.",
    )
    return parser


def build_check_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="museum-quiz check",
        description="Validate a question bank without playing it.",
    )
    _add_common_arguments(parser)
    return parser


def build_init_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="museum-quiz init",
        description=f"Write the default {CONFIG_FILENAME} template.",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root (defaults to ~/.museum-quiz).",
    )
    parser.add_argument(
        "--path",
        type=Path,
        help="Write the template here instead of the workspace config dir.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file.",
    )
    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--bank",
        type=Path,
        help="Question bank (JSON or JSONL); defaults to the bundled sample.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML config file.",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and logs.",
    )


def play_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_play_parser()
    args = parser.parse_args(argv)
    overrides = ConfigOverrides(
        bank_path=args.bank,
        audio_enabled=args.audio,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except QuizConfigError as exc:
        parser.error(str(exc))

    config = load_result.config
    log_path = configure_logging(
        load_result.workspace.logs_dir,
        level=config.log_level,
        verbose=args.verbose,
    )
    logger.debug(
        "play invoked",
        extra={"bank": config.bank_path, "tui": bool(args.tui)},
    )

    try:
        questions = _load_questions(config)
    except QuestionBankError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        logger.error("Could not load question bank", extra={"error": str(exc)})
        return 2
    if not questions:
        sys.stderr.write("Error: question bank is empty.\n")
        return 2

    console = Console()
    controller = build_controller(questions, config, console=console)
    if args.tui:
        from .view import QuizApp

        app = QuizApp(controller)
        if config.audio_enabled:
            controller.audio = CallableCue(app.bell)
        app.run()
        return 0

    result = run_quiz_session(
        controller, console, lambda: console.input("> ")
    )
    logger.info(
        "Session finished",
        extra={
            "exit_action": result.exit_action,
            "attempts": result.attempts,
            "score": result.summary.score if result.summary else None,
        },
    )
    console.print(f"[dim]Log file: {log_path}[/]")
    return 0


def check_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_check_parser()
    args = parser.parse_args(argv)
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=ConfigOverrides(bank_path=args.bank),
            workspace_path=args.workspace,
        )
    except QuizConfigError as exc:
        parser.error(str(exc))
    try:
        questions = _load_questions(load_result.config)
    except QuestionBankError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 2
    if not questions:
        sys.stderr.write("Error: question bank is empty.\n")
        return 2
    source = load_result.config.bank_path or "bundled sample"
    print(f"{source}: {len(questions)} question(s) OK")
    return 0


def init_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_init_parser()
    args = parser.parse_args(argv)
    target = args.path
    if target is None:
        try:
            workspace = ensure_workspace(path=args.workspace)
        except WorkspaceError as exc:
            parser.error(str(exc))
        target = workspace.config_dir / CONFIG_FILENAME
    try:
        written = write_template(target, overwrite=args.force)
    except QuizConfigError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    print(f"Wrote {written}")
    return 0


def build_controller(
    questions: Sequence[Question],
    config: QuizConfig,
    *,
    console: Console,
) -> QuizController:
    audio: AudioCue = (
        ConsoleBellCue(console) if config.audio_enabled else SilentCue()
    )
    animator = ProgressAnimator(
        len(questions),
        duration_ms=config.duration_ms,
        easing=EASINGS[config.easing],
    )
    return QuizController(questions, audio=audio, animator=animator)


def _load_questions(config: QuizConfig) -> List[Question]:
    if config.bank_path is None:
        return load_sample_bank()
    return load_question_bank(config.bank_path)
