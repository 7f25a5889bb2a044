"""Export options and .env loading."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "trello2md"
DEFAULT_LIST_FILTER = "Done"

logger = logging.getLogger("trello2md.config")


@dataclass(frozen=True, slots=True)
class ExportOptions:
    """Which optional card sections to render."""

    show_labels_and_members: bool = False
    show_description: bool = False
    show_checklists: bool = False
    show_comments: bool = False
    show_attachments: bool = False

    @classmethod
    def all(cls) -> ExportOptions:
        return cls(
            show_labels_and_members=True,
            show_description=True,
            show_checklists=True,
            show_comments=True,
            show_attachments=True,
        )


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()

    name, sep, value = line.partition("=")
    name = name.strip()
    if not sep or not name:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return name, value[1:-1]
    # unquoted values may carry a trailing "# comment"
    value, _, _ = value.partition(" #")
    return name, value.rstrip()


def _load_env_from_path(path: Path) -> list[str]:
    """Apply KEY=VALUE pairs from a .env file to the environment.

    Shell-style `export KEY=VALUE` lines are accepted. Variables already set
    in the environment are left alone.

    Returns:
        Names of the variables that were set from this file.
    """
    if not path.is_file():
        return []

    applied: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        pair = _parse_env_line(raw_line)
        if pair is None:
            continue
        name, value = pair
        if name in os.environ:
            continue
        os.environ[name] = value
        applied.append(name)

    if applied:
        logger.debug("Loaded %s from %s", ", ".join(applied), path)
    return applied


def _load_env(env_file: str | None) -> None:
    """
    Load environment variables from .env files.

    Search order:
    1. Explicit env_file if provided.
    2. .env in current working directory.
    3. ~/.config/trello2md/.env as a global fallback.

    Variables from earlier sources take precedence (won't be overridden).
    """
    if env_file:
        _load_env_from_path(Path(env_file).expanduser())
    else:
        _load_env_from_path(Path.cwd() / ".env")
        _load_env_from_path(CONFIG_DIR / ".env")
