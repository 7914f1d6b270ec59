"""Configuration loader for quiz runs."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from museum_quiz.core.workspace import (
    Workspace,
    WorkspaceError,
    ensure_workspace,
)

from .progress import DEFAULT_DURATION_MS, EASINGS

CONFIG_FILENAME = "quiz.toml"
CONFIG_ENV = "MUSEUM_QUIZ_CONFIG"
ENV_PREFIX = "MUSEUM_QUIZ_"

_DEFAULT_EASING = "linear"
_DEFAULT_LOG_LEVEL = "INFO"
_TEMPLATE_PACKAGE = "museum_quiz.quiz.data"
_TEMPLATE_FILENAME = "template.toml"


class QuizConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class QuizConfig:
    """Fully resolved configuration for a quiz run."""

    bank_path: Optional[Path]
    duration_ms: int
    easing: str
    audio_enabled: bool
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    bank_path: Optional[Path] = None
    audio_enabled: Optional[bool] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizConfig
    workspace: Workspace
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        workspace = ensure_workspace(env=env_map, path=workspace_path)
    except WorkspaceError as exc:
        raise QuizConfigError(str(exc)) from exc
    default_path = workspace.config_dir / CONFIG_FILENAME
    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=default_path,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        loaded_path = requested_path
        _apply_file(table, _read_toml(requested_path))
    elif config_path is not None or (env_map.get(CONFIG_ENV) or "").strip():
        raise QuizConfigError(f"Config file not found: {requested_path}")

    bank_path = _pick_first(
        overrides.bank_path,
        _env_path(env_map, "BANK"),
        _file_path(table["quiz"]["bank"], base=requested_path.parent),
    )
    log_level = _pick_first(
        overrides.log_level,
        (env_map.get(f"{ENV_PREFIX}LOG_LEVEL") or "").strip() or None,
        table["logging"]["level"],
    )
    audio_enabled = _pick_first(
        overrides.audio_enabled,
        table["audio"]["enabled"],
    )

    config = QuizConfig(
        bank_path=bank_path,
        duration_ms=_validate_duration(table["progress"]["duration_ms"]),
        easing=_validate_easing(table["progress"]["easing"]),
        audio_enabled=_validate_bool(audio_enabled, field="audio.enabled"),
        log_level=_validate_log_level(log_level),
    )
    return LoadResult(
        config=config, workspace=workspace, config_path=loaded_path
    )


def template_text() -> str:
    """Return the packaged ``quiz.toml`` template."""

    resource = resources.files(_TEMPLATE_PACKAGE).joinpath(_TEMPLATE_FILENAME)
    return resource.read_text(encoding="utf-8")


def write_template(path: Path, *, overwrite: bool = False) -> Path:
    """Write the packaged template to ``path`` (refusing to clobber)."""

    path = Path(path)
    if path.exists() and not overwrite:
        raise QuizConfigError(f"Config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template_text(), encoding="utf-8")
    return path


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise QuizConfigError(f"Failed to parse {path}: {exc}") from exc
    except OSError as exc:
        raise QuizConfigError(f"Cannot read {path}: {exc}") from exc


def _apply_file(
    table: MutableMapping[str, MutableMapping[str, object]],
    loaded: Mapping[str, Any],
) -> None:
    """Copy ``loaded`` over the defaults; only known tables and keys pass."""

    for section, values in loaded.items():
        if section not in table:
            raise QuizConfigError(f"Unknown configuration key '{section}'.")
        if not isinstance(values, Mapping):
            raise QuizConfigError(
                f"Expected table for '{section}', "
                f"found {type(values).__name__}."
            )
        known = table[section]
        for key, value in values.items():
            if key not in known:
                raise QuizConfigError(
                    f"Unknown configuration key '{section}.{key}'."
                )
            known[key] = value


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "quiz": {"bank": ""},
        "progress": {
            "duration_ms": DEFAULT_DURATION_MS,
            "easing": _DEFAULT_EASING,
        },
        "audio": {"enabled": True},
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = (env_map.get(CONFIG_ENV) or "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _pick_first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _env_path(env_map: Mapping[str, str], suffix: str) -> Optional[Path]:
    raw = (env_map.get(f"{ENV_PREFIX}{suffix}") or "").strip()
    return Path(raw).expanduser() if raw else None


def _file_path(value: object, *, base: Path) -> Optional[Path]:
    if not isinstance(value, str):
        raise QuizConfigError("quiz.bank must be a string.")
    raw = value.strip()
    if not raw:
        return None
    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return candidate


def _validate_duration(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise QuizConfigError(
            "progress.duration_ms must be a non-negative integer."
        )
    return value


def _validate_easing(value: object) -> str:
    if not isinstance(value, str) or value.strip().lower() not in EASINGS:
        expected = ", ".join(sorted(EASINGS))
        raise QuizConfigError(
            f"Unknown progress.easing {value!r}. Expected one of: {expected}."
        )
    return value.strip().lower()


def _validate_bool(value: object, *, field: str) -> bool:
    if not isinstance(value, bool):
        raise QuizConfigError(f"'{field}' must be true or false.")
    return value


def _validate_log_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise QuizConfigError("logging.level must be a non-empty string.")
    normalized = value.strip().upper()
    if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise QuizConfigError(f"Unknown log level '{value}'.")
    return normalized
