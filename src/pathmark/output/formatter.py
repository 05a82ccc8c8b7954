"""Text and JSON formatting for complexity markers."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone

# Envelope schema versioning (semver: major.minor.patch)
ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "pathmark-envelope-v1"

# Upper bounds (exclusive) of each severity tier
SEVERITY_TIERS: list[tuple[int, str]] = [
    (20, "low"),
    (30, "moderate"),
    (40, "elevated"),
    (100, "high"),
    (1000, "very-high"),
    (10000, "extreme"),
]
TOP_TIER = "pathological"


def complexity_label(value: int) -> str:
    """Short marker text for a complexity value.

    Values below a thousand are shown as-is, then ``k`` and ``m`` suffixes
    (truncated, not rounded), and beyond that the power of ten.
    """
    if value < 1_000:
        return str(value)
    if value < 1_000_000:
        return f"{value // 1_000}k"
    if value < 1_000_000_000:
        return f"{value // 1_000_000}m"
    return f"10^{len(str(value)) - 1}"


def severity_tier(value: int) -> str:
    for bound, name in SEVERITY_TIERS:
        if value < bound:
            return name
    return TOP_TIER


def marker_tooltip(metric_name: str, value: int) -> str:
    return f"{metric_name}: {value}"


def loc(path: str, line: int | None = None, column: int | None = None) -> str:
    if line is None:
        return path
    if column is not None:
        return f"{path}:{line}:{column}"
    return f"{path}:{line}"


def format_table(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    if not rows:
        return "(none)"
    widths = [len(h) for h in headers]
    num_cols = len(widths)
    for row in rows:
        for i, cell in enumerate(row):
            if i < num_cols:
                widths[i] = max(widths[i], len(str(cell)))
    lines = ["  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))]
    lines.append("  ".join("-" * w for w in widths))
    display_rows = rows[:budget] if budget and len(rows) > budget else rows
    for row in display_rows:
        lines.append("  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering."""
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    Returns a dict with at minimum::

        {
            "schema":         "pathmark-envelope-v1",
            "schema_version": "1.0.0",
            "command":        "npath",
            "version":        "<current>",
            "summary":        { ... },
            "_meta":          {"timestamp": "2026-02-12T14:30:00Z"},
            ...payload
        }

    The timestamp lives under ``_meta`` so the content keys stay identical
    across invocations.
    """
    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {"timestamp": ts}
    return out


def _get_version() -> str:
    from pathmark import __version__

    return __version__
