"""Shared testing helpers for the museum_quiz test suite."""

from .quiz import FakeClock, make_questions, write_bank  # noqa: F401

__all__ = [
    "FakeClock",
    "make_questions",
    "write_bank",
]
