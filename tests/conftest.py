from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import FakeClock, make_questions  # noqa: E402
from museum_quiz.quiz.models import Question  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def three_questions() -> list[Question]:
    return make_questions("B", "A", "C")


@pytest.fixture(autouse=True)
def _isolated_workspace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep every test's workspace and env overrides under ``tmp_path``."""

    monkeypatch.setenv("MUSEUM_QUIZ_HOME", str(tmp_path / "home"))
    for suffix in ("CONFIG", "BANK", "LOG_LEVEL"):
        monkeypatch.delenv(f"MUSEUM_QUIZ_{suffix}", raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo ``configure_logging`` side effects so caplog keeps working."""

    yield
    logger = logging.getLogger("museum_quiz")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
