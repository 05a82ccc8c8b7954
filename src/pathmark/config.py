"""Project discovery and the ``.pathmark/config.json`` settings file."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pathmark.metrics.npath import DEFAULT_MAX_DEPTH

DEFAULT_CONFIG_DIR = ".pathmark"
MAX_DEPTH_ENV = "PATHMARK_MAX_DEPTH"


def find_project_root(start: str = ".") -> Path:
    """Find the project root by looking for .git directory."""
    current = Path(start).resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return Path(start).resolve()


def config_path(project_root: Path | None = None) -> Path:
    if project_root is None:
        project_root = find_project_root()
    return project_root / DEFAULT_CONFIG_DIR / "config.json"


def load_project_config(project_root: Path | None = None) -> dict:
    """Load .pathmark/config.json if it exists.

    Returns an empty dict if the file is missing or malformed.
    """
    path = config_path(project_root)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        if isinstance(data, dict):
            return data
    return {}


def write_project_config(config: dict, project_root: Path | None = None) -> Path:
    """Write (or update) .pathmark/config.json.

    Merges *config* into the existing config so existing keys are preserved.
    Returns the path of the written file.
    """
    path = config_path(project_root)
    path.parent.mkdir(exist_ok=True)
    existing = load_project_config(project_root)
    existing.update(config)
    path.write_text(json.dumps(existing, indent=2), encoding="utf-8")
    return path


def _positive_int(value, source: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{source}: expected a positive integer, got {value!r}")
    try:
        depth = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{source}: expected a positive integer, got {value!r}") from None
    if depth < 1:
        raise ValueError(f"{source}: expected a positive integer, got {value!r}")
    return depth


def get_max_depth(project_root: Path | None = None) -> int:
    """Maximum syntax nesting depth a measurement may traverse.

    Resolution order (first match wins):

    1. ``PATHMARK_MAX_DEPTH`` environment variable.
    2. ``.pathmark/config.json`` → ``"max_depth"`` key.
    3. Default: 128.
    """
    override = os.environ.get(MAX_DEPTH_ENV)
    if override:
        return _positive_int(override, MAX_DEPTH_ENV)
    value = load_project_config(project_root).get("max_depth")
    if value is not None:
        return _positive_int(value, "max_depth")
    return DEFAULT_MAX_DEPTH


def get_exclude_patterns(project_root: Path | None = None) -> list[str]:
    patterns = load_project_config(project_root).get("exclude") or []
    if isinstance(patterns, str):
        return [patterns]
    return [str(p) for p in patterns]
