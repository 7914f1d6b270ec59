from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

import pytest

from museum_quiz.core import logging as core_logging


def _flush() -> None:
    for handler in logging.getLogger("museum_quiz").handlers:
        handler.flush()


def _records(path: Path) -> list[dict]:
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


def _owned_handlers() -> list[logging.Handler]:
    return [
        handler
        for handler in logging.getLogger("museum_quiz").handlers
        if getattr(handler, "_museum_quiz", False)
    ]


def test_child_loggers_write_json_lines(tmp_path):
    log_path = core_logging.configure_logging(tmp_path / "logs")
    logger = logging.getLogger("museum_quiz.quiz.controller")

    logger.info(
        "Answer submitted",
        extra={"question_id": "q1", "correct": True, "score": 1},
    )

    class _Opaque:
        def __repr__(self) -> str:
            return "opaque"

    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception(
            "Audio cue failed",
            extra={
                "cue": _Opaque(),
                "details": {"paths": [Path("/tmp"), 2], "ok": None},
            },
        )
    _flush()

    assert log_path == tmp_path / "logs" / "museum_quiz.log"
    first, last = _records(log_path)
    assert first["message"] == "Answer submitted"
    assert first["level"] == "INFO"
    assert first["logger"] == "museum_quiz.quiz.controller"
    assert first["extra"] == {"question_id": "q1", "correct": True, "score": 1}

    assert "ValueError: boom" in last["exception"]
    assert last["extra"]["cue"] == "opaque"
    assert last["extra"]["details"]["paths"] == ["/tmp", 2]


def test_level_filters_file_output(tmp_path):
    log_path = core_logging.configure_logging(tmp_path, level="warning")
    logger = logging.getLogger("museum_quiz.tests")

    logger.info("hidden")
    logger.warning("shown")
    _flush()

    assert [record["message"] for record in _records(log_path)] == ["shown"]


def test_verbose_logs_debug_and_mirrors_to_stderr(tmp_path, capsys):
    log_path = core_logging.configure_logging(
        tmp_path, level="ERROR", verbose=True
    )

    logging.getLogger("museum_quiz.tests").debug("details")
    _flush()

    assert [record["message"] for record in _records(log_path)] == ["details"]
    assert "DEBUG details" in capsys.readouterr().err


def test_reconfiguring_replaces_handlers(tmp_path):
    core_logging.configure_logging(tmp_path / "one", verbose=True)
    assert len(_owned_handlers()) == 2

    second = core_logging.configure_logging(tmp_path / "two")

    handlers = _owned_handlers()
    assert len(handlers) == 1
    assert Path(handlers[0].baseFilename) == second
    assert second.parent == tmp_path / "two"


def test_unwritable_directory_falls_back(tmp_path, monkeypatch):
    blocked = tmp_path / "blocked"
    fallback = tmp_path / "fallback"
    original_mkdir = Path.mkdir

    def fake_mkdir(self, *args, **kwargs):  # noqa: ANN001
        if self == blocked:
            raise PermissionError("denied")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", fake_mkdir)
    monkeypatch.setattr(core_logging, "_fallback_log_dir", lambda: fallback)

    log_path = core_logging.configure_logging(blocked)

    assert log_path == fallback / "museum_quiz.log"
    assert log_path.exists()


def test_fallback_log_dir_lives_in_tempdir(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path))
    assert core_logging._fallback_log_dir() == tmp_path / "museum-quiz-logs"


@pytest.mark.parametrize(
    ("level", "expected"),
    [("debug", logging.DEBUG), ("ERROR", logging.ERROR), ("bogus", logging.INFO)],
)
def test_level_number(level, expected):
    assert core_logging._level_number(level) == expected
