"""Audio cues played when an option is pressed."""

from __future__ import annotations

from typing import Callable, Protocol

from rich.console import Console


class AudioCue(Protocol):
    def play(self) -> None:
        ...


class SilentCue:
    """Cue used when audio is disabled."""

    def play(self) -> None:
        return None


class ConsoleBellCue:
    """Ring the terminal bell through a Rich console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def play(self) -> None:
        self.console.bell()


class CallableCue:
    """Adapt any zero-argument callable, such as ``App.bell``."""

    def __init__(self, func: Callable[[], object]) -> None:
        self.func = func

    def play(self) -> None:
        self.func()
