"""Shared implementation of the per-metric marker commands."""

from __future__ import annotations

import click

from pathmark.config import find_project_root, get_exclude_patterns, get_max_depth
from pathmark.exit_codes import NoSupportedFilesError, PartialResultError, PathmarkError
from pathmark.metrics.measure import Marker, iter_source_files, measure_file, metric_name
from pathmark.output.formatter import (
    complexity_label,
    format_table,
    json_envelope,
    loc,
    marker_tooltip,
    severity_tier,
    to_json,
)


def marker_record(marker: Marker) -> dict:
    """Marker fields plus its presentation (label, tier, tooltip)."""
    record = marker.to_dict()
    if marker.value is not None:
        record["label"] = complexity_label(marker.value)
        record["tier"] = severity_tier(marker.value)
        record["tooltip"] = marker_tooltip(metric_name(marker.metric), marker.value)
    else:
        record["label"] = record["tier"] = record["tooltip"] = None
    return record


def collect_markers(metric: str, paths, max_depth: int, exclude: list[str]) -> tuple[list[str], list[Marker]]:
    files = list(iter_source_files(paths, exclude))
    if not files:
        raise NoSupportedFilesError()
    markers: list[Marker] = []
    for path in files:
        try:
            markers.extend(measure_file(path, metric, max_depth))
        except OSError as exc:
            raise PathmarkError(f"cannot read {path}: {exc}") from exc
    return files, markers


def run_marker_command(ctx, command: str, metric: str, paths, show_all: bool) -> None:
    json_mode = ctx.obj.get("json") if ctx.obj else False
    root = find_project_root()
    try:
        max_depth = get_max_depth(root)
    except ValueError as exc:
        raise PathmarkError(f"invalid configuration: {exc}") from exc

    files, markers = collect_markers(metric, paths or (".",), max_depth, get_exclude_patterns(root))
    applicable = [m for m in markers if m.applicable]
    failed = [m for m in markers if m.error]
    shown = markers if show_all else [m for m in markers if m.applicable or m.error]
    highest = max((m.value for m in applicable), default=None)

    if json_mode:
        click.echo(to_json(json_envelope(
            command,
            summary={
                "verdict": "partial" if failed else "ok",
                "metric": metric_name(metric),
                "files": len(files),
                "anchors": len(markers),
                "applicable": len(applicable),
                "failed": len(failed),
                "max_value": highest,
                "max_depth": max_depth,
            },
            markers=[marker_record(m) for m in shown],
        )))
    else:
        rows = []
        for m in shown:
            if m.error:
                rows.append([loc(m.path, m.line, m.column), m.keyword, "error", "", m.error])
            elif m.value is None:
                rows.append([loc(m.path, m.line, m.column), m.keyword, "-", "", "n/a"])
            else:
                rows.append([loc(m.path, m.line, m.column), m.keyword, str(m.value),
                             complexity_label(m.value), severity_tier(m.value)])
        click.echo(f"{metric_name(metric)} ({len(files)} files, {len(markers)} anchors, "
                   f"{len(applicable)} applicable, {len(failed)} failed):\n")
        click.echo(format_table(["location", "anchor", "value", "label", "tier"], rows))

    if failed:
        raise PartialResultError(len(failed))
