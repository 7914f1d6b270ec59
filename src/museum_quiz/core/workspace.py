"""Where museum-quiz keeps its ``quiz.toml`` and log files.

The workspace root comes from ``--workspace``, then ``MUSEUM_QUIZ_HOME``,
then ``~/.museum-quiz``. Only the default root may be swapped for a
temp-dir location when it cannot be created; a root the user asked for
either works or fails loudly.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

WORKSPACE_ENV = "MUSEUM_QUIZ_HOME"
DEFAULT_WORKSPACE = Path.home() / ".museum-quiz"


class WorkspaceError(RuntimeError):
    """Raised when the workspace directories cannot be used."""


@dataclass(frozen=True)
class Workspace:
    home: Path

    @property
    def config_dir(self) -> Path:
        return self.home / "config"

    @property
    def logs_dir(self) -> Path:
        return self.home / "logs"

    def create(self) -> bool:
        """Create the root and its subdirectories; True if anything was new."""

        created = False
        for directory in (self.home, self.config_dir, self.logs_dir):
            if directory.exists():
                if not directory.is_dir():
                    raise WorkspaceError(
                        f"Workspace path is not a directory: {directory}"
                    )
                continue
            directory.mkdir(parents=True, mode=0o700)
            created = True
        return created


def locate_workspace(
    *, env: Mapping[str, str] | None = None, path: Path | None = None
) -> tuple[Workspace, bool]:
    """Return the workspace to use and whether the user chose it."""

    env_map = os.environ if env is None else env
    if path is None:
        custom = (env_map.get(WORKSPACE_ENV) or "").strip()
        path = Path(custom) if custom else None
    if path is None:
        return Workspace(DEFAULT_WORKSPACE.expanduser().resolve()), False
    return Workspace(path.expanduser().resolve()), True


def ensure_workspace(
    *,
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
) -> Workspace:
    """Locate the workspace and make sure its directories exist."""

    workspace, chosen = locate_workspace(env=env, path=path)
    try:
        workspace.create()
        return workspace
    except PermissionError as exc:
        if chosen:
            raise WorkspaceError(
                f"Cannot create workspace at {workspace.home}: {exc}"
            ) from exc
        original_error = exc

    fallback = Workspace(_fallback_home())
    try:
        fallback.create()
    except PermissionError as exc:
        raise WorkspaceError(
            f"Cannot create workspace at {workspace.home} "
            f"or {fallback.home}: {original_error}"
        ) from exc
    return fallback


def _fallback_home() -> Path:
    return Path(tempfile.gettempdir()) / "museum-quiz"
