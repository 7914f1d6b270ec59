"""Workspace and logging plumbing shared by museum-quiz commands."""

from __future__ import annotations

from .logging import JsonLogFormatter, configure_logging
from .workspace import (
    WORKSPACE_ENV,
    Workspace,
    WorkspaceError,
    ensure_workspace,
    locate_workspace,
)

__all__ = [
    "JsonLogFormatter",
    "configure_logging",
    "WORKSPACE_ENV",
    "Workspace",
    "WorkspaceError",
    "ensure_workspace",
    "locate_workspace",
]
