"""Per-file measurement: parse, adapt, find anchors, measure each one."""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator

from pathmark.languages.registry import detect_language, get_adapter, get_ts_parser
from pathmark.metrics.anchors import Anchor, find_anchors, measure_cyclomatic, measure_npath
from pathmark.metrics.errors import MeasurementError
from pathmark.metrics.npath import DEFAULT_MAX_DEPTH
from pathmark.syntax.nodes import SyntaxNode

log = logging.getLogger(__name__)

# Directories never worth descending into
_SKIP_DIRS = frozenset({".git", ".hg", ".svn", ".pathmark", "node_modules", "build", "target", "out"})


def _npath(anchor: Anchor, max_depth: int) -> int | None:
    return measure_npath(anchor, max_depth=max_depth)


def _cyclomatic(anchor: Anchor, max_depth: int) -> int | None:
    # the walk is iterative; max_depth only keeps the METRICS signature uniform
    return measure_cyclomatic(anchor)


# metric key -> (display name, measure function)
METRICS: dict[str, tuple[str, Callable[[Anchor, int], int | None]]] = {
    "npath": ("NPath Complexity", _npath),
    "cyclomatic": ("Cyclomatic Complexity", _cyclomatic),
}


@dataclass
class Marker:
    """One measured anchor, ready for presentation."""

    metric: str
    path: str
    line: int
    column: int
    trigger: str
    keyword: str
    value: int | None = None
    error: str | None = None

    @property
    def applicable(self) -> bool:
        return self.value is not None

    def to_dict(self) -> dict:
        return {
            "metric": self.metric,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "trigger": self.trigger,
            "keyword": self.keyword,
            "value": self.value,
            "error": self.error,
        }


def metric_name(metric: str) -> str:
    try:
        return METRICS[metric][0]
    except KeyError:
        raise ValueError(f"Unknown metric: {metric}") from None


def parse_source(source: bytes, language: str, max_depth: int = DEFAULT_MAX_DEPTH) -> SyntaxNode:
    """Parse *source* and convert it to syntax nodes."""
    parser = get_ts_parser(language)
    tree = parser.parse(source)
    return get_adapter(language, max_depth=max_depth).adapt(tree, source)


def measure_anchor(anchor: Anchor, metric: str, path: str = "", max_depth: int = DEFAULT_MAX_DEPTH) -> Marker:
    """Measure one anchor; failures are recorded on the marker."""
    metric_name(metric)
    measure = METRICS[metric][1]
    marker = Marker(
        metric=metric,
        path=path,
        line=anchor.token.line,
        column=anchor.token.column,
        trigger=anchor.trigger,
        keyword=anchor.token.text,
    )
    if anchor.construct.error is not None:
        # the declaration never made it through conversion
        log.warning("%s:%d: %s measurement failed: %s", path or "<source>", marker.line, metric, anchor.construct.error)
        marker.error = anchor.construct.error
        return marker
    try:
        marker.value = measure(anchor, max_depth)
    except (MeasurementError, RecursionError) as exc:
        log.warning("%s:%d: %s measurement failed: %s", path or "<source>", marker.line, metric, exc)
        marker.error = str(exc) or type(exc).__name__
    return marker


def measure_source(
    source: bytes | str,
    language: str,
    metric: str = "npath",
    max_depth: int = DEFAULT_MAX_DEPTH,
    path: str = "",
) -> list[Marker]:
    """Measure every anchor in *source*, in source order.

    A declaration too deep to convert fails on its own name anchor. If the
    compilation unit itself cannot be converted, a single failed marker at
    line 1 stands in for the file.
    """
    metric_name(metric)
    if isinstance(source, str):
        source = source.encode("utf-8")
    try:
        root = parse_source(source, language, max_depth=max_depth)
    except (MeasurementError, RecursionError) as exc:
        log.warning("%s: could not convert syntax tree: %s", path or "<source>", exc)
        return [Marker(metric, path, 1, 1, "file", "", error=str(exc) or type(exc).__name__)]
    return [measure_anchor(anchor, metric, path, max_depth) for anchor in find_anchors(root)]


def measure_file(path: str | Path, metric: str = "npath", max_depth: int = DEFAULT_MAX_DEPTH) -> list[Marker]:
    """Measure one source file; the language is detected from its extension."""
    path = str(path)
    language = detect_language(path)
    if language is None:
        raise ValueError(f"Unsupported file type: {path}")
    with open(path, "rb") as f:
        source = f.read()
    markers = measure_source(source, language, metric, max_depth, path=path)
    log.info(
        "%s: %d anchors, %d applicable, %d failed",
        path,
        len(markers),
        sum(1 for m in markers if m.applicable),
        sum(1 for m in markers if m.error),
    )
    return markers


def _excluded(path: str, exclude: Iterable[str]) -> bool:
    normalized = path.replace(os.sep, "/")
    name = os.path.basename(path)
    return any(fnmatch.fnmatch(normalized, pattern) or fnmatch.fnmatch(name, pattern) for pattern in exclude)


def iter_source_files(paths: Iterable[str | Path], exclude: Iterable[str] = ()) -> Iterator[str]:
    """Yield supported source files under *paths*, sorted per directory.

    Explicit file arguments are yielded when their language is supported.
    Paths matching any *exclude* glob (full path or basename) are skipped.
    """
    exclude = list(exclude)
    for raw in paths:
        path = str(raw)
        if os.path.isfile(path):
            if detect_language(path) and not _excluded(path, exclude):
                yield path
            continue
        for dirpath, dirnames, filenames in os.walk(path):
            dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS and not d.startswith("."))
            for filename in sorted(filenames):
                full = os.path.join(dirpath, filename)
                if detect_language(full) and not _excluded(full, exclude):
                    yield full
