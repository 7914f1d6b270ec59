"""``museum-quiz`` console script.

Subcommands live in :mod:`museum_quiz.quiz._main` and are imported only when
invoked, so ``museum-quiz list`` stays fast and does not pull in Textual.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Optional, Sequence

COMMAND_MODULE = "museum_quiz.quiz._main"


@dataclass(frozen=True)
class Command:
    name: str
    entry_point: str
    summary: str
    tui: bool = False

    def run(self, argv: Sequence[str]) -> int:
        handler = getattr(import_module(COMMAND_MODULE), self.entry_point)
        try:
            result = handler(list(argv))
        except SystemExit as exc:
            return exit_code(exc)
        return result if isinstance(result, int) else 0


COMMANDS = {
    command.name: command
    for command in (
        Command(
            "init",
            "init_main",
            "Write the default quiz.toml into the workspace.",
        ),
        Command(
            "play",
            "play_main",
            "Play a quiz with Rich prompts (or --tui for Textual).",
            tui=True,
        ),
        Command("check", "check_main", "Validate a question bank file."),
    )
}


def format_command_table() -> str:
    width = max(len(name) for name in COMMANDS)
    rows = [
        f"  {command.name.ljust(width)}  {command.summary}"
        + (" (TUI)" if command.tui else "")
        for command in COMMANDS.values()
    ]
    return "\n".join(["Available commands:", *rows])


def format_usage() -> str:
    return (
        "Usage: museum-quiz <command> [args...]\n"
        "Run `museum-quiz list` for commands or `museum-quiz help <name>` "
        "for details.\n\n" + format_command_table()
    )


def exit_code(exc: SystemExit) -> int:
    """Turn a ``SystemExit`` raised by a subcommand into a return code."""

    if exc.code is None:
        return 0
    if isinstance(exc.code, int):
        return exc.code
    print(exc.code, file=sys.stderr)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(format_usage())
        return 2

    name, rest = args[0], args[1:]
    if name in ("-h", "--help"):
        print(format_usage())
        return 0
    if name in ("-V", "--version", "version"):
        print(_installed_version())
        return 0
    if name == "list":
        print(format_command_table())
        return 0
    if name == "help":
        return _show_help(rest)

    command = COMMANDS.get(name)
    if command is None:
        return _unknown(name)
    return command.run(rest)


def _show_help(args: Sequence[str]) -> int:
    if not args:
        print(format_usage())
        return 0
    command = COMMANDS.get(args[0])
    if command is None:
        return _unknown(args[0])
    print(f"{command.name}: {command.summary}")
    print(f"Run `museum-quiz {command.name} --help` for CLI-specific options.")
    return 0


def _unknown(name: str) -> int:
    print(f"Unknown command '{name}'.", file=sys.stderr)
    print(format_command_table(), file=sys.stderr)
    return 2


def _installed_version() -> str:
    try:
        return metadata.version("museum-quiz")
    except metadata.PackageNotFoundError:
        return "unknown"


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
