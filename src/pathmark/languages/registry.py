"""Language detection, grammar loading, and tree adapter registry."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import TreeAdapter

EXTENSION_MAP: dict[str, str] = {
    ".java": "java",
}

_SUPPORTED_LANGUAGES = frozenset(EXTENSION_MAP.values())


def supported_languages() -> list[str]:
    return sorted(_SUPPORTED_LANGUAGES)


def detect_language(path: str) -> str | None:
    """Determine the language for a file based on its extension.

    Returns the language name string, or None if unsupported.
    """
    _, ext = os.path.splitext(path)
    return EXTENSION_MAP.get(ext.lower())


def _check_supported(language: str) -> None:
    if language not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")


@lru_cache(maxsize=None)
def get_ts_parser(language: str):
    """Get a tree-sitter Parser from tree_sitter_language_pack.

    Raises:
        ValueError: If the language is not supported.
    """
    _check_supported(language)
    from tree_sitter_language_pack import get_parser

    return get_parser(language)


def get_adapter(language: str, max_depth: int | None = None) -> "TreeAdapter":
    """Create a tree adapter for *language*.

    Adapters keep per-conversion state, so a new one is built on every call.
    """
    _check_supported(language)
    if language == "java":
        from .java_lang import JavaTreeAdapter

        if max_depth is None:
            return JavaTreeAdapter()
        return JavaTreeAdapter(max_depth=max_depth)
    raise ValueError(f"No tree adapter for language: {language}")
