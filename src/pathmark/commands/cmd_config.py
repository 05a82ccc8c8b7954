"""Manage per-project pathmark configuration (.pathmark/config.json)."""

from __future__ import annotations

import click

from pathmark.config import (
    MAX_DEPTH_ENV,
    find_project_root,
    get_max_depth,
    load_project_config,
    write_project_config,
)
from pathmark.exit_codes import PathmarkError
from pathmark.output.formatter import json_envelope, to_json


def _excludes(current: dict) -> list:
    existing = current.get("exclude", [])
    return list(existing) if isinstance(existing, list) else []


@click.command("config")
@click.option(
    "--set-max-depth",
    "max_depth",
    default=None,
    type=click.IntRange(min=1),
    help="Maximum syntax nesting depth a measurement may traverse.",
)
@click.option(
    "--exclude",
    "exclude_pattern",
    default=None,
    help="Add a glob pattern to the exclude list in .pathmark/config.json.",
)
@click.option(
    "--remove-exclude",
    "remove_pattern",
    default=None,
    help="Remove a glob pattern from the exclude list in .pathmark/config.json.",
)
@click.option("--show", is_flag=True, help="Print current configuration.")
@click.pass_context
def config(ctx, max_depth, exclude_pattern, remove_pattern, show):
    """Manage per-project pathmark configuration (.pathmark/config.json).

    \b
      pathmark config --set-max-depth 256
      pathmark config --exclude "generated/*"
      pathmark config --remove-exclude "generated/*"

    The ``PATHMARK_MAX_DEPTH`` env-var wins over the saved depth if set.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    root = find_project_root()
    current = load_project_config(root)

    if max_depth is not None:
        config_path = write_project_config({"max_depth": max_depth}, root)
        if json_mode:
            click.echo(to_json(json_envelope(
                "config",
                summary={"verdict": "saved", "max_depth": max_depth},
                config_path=str(config_path),
                max_depth=max_depth,
            )))
            return
        click.echo(f"Saved max_depth = {max_depth}")
        click.echo(f"Config written to {config_path}")
        return

    if exclude_pattern is not None:
        existing_excludes = _excludes(current)
        if exclude_pattern not in existing_excludes:
            existing_excludes.append(exclude_pattern)
        config_path = write_project_config({"exclude": existing_excludes}, root)
        if json_mode:
            click.echo(to_json(json_envelope(
                "config",
                summary={"verdict": "exclude-added", "pattern": exclude_pattern},
                exclude=existing_excludes,
                config_path=str(config_path),
            )))
            return
        click.echo(f"Added exclude pattern: {exclude_pattern!r}")
        click.echo(f"Active config excludes: {existing_excludes}")
        click.echo(f"Config written to {config_path}")
        return

    if remove_pattern is not None:
        existing_excludes = _excludes(current)
        if remove_pattern not in existing_excludes:
            if json_mode:
                click.echo(to_json(json_envelope(
                    "config",
                    summary={"verdict": "not-found", "pattern": remove_pattern},
                    exclude=existing_excludes,
                )))
                return
            click.echo(f"Pattern {remove_pattern!r} not found in exclude list.")
            return
        existing_excludes.remove(remove_pattern)
        config_path = write_project_config({"exclude": existing_excludes}, root)
        if json_mode:
            click.echo(to_json(json_envelope(
                "config",
                summary={"verdict": "exclude-removed", "pattern": remove_pattern},
                exclude=existing_excludes,
                config_path=str(config_path),
            )))
            return
        click.echo(f"Removed exclude pattern: {remove_pattern!r}")
        click.echo(f"Active config excludes: {existing_excludes}")
        return

    # --show, or no option at all
    try:
        effective_depth = get_max_depth(root)
    except ValueError as exc:
        raise PathmarkError(f"invalid configuration: {exc}") from exc

    if json_mode:
        click.echo(to_json(json_envelope(
            "config",
            summary={"verdict": "show", "max_depth": effective_depth},
            project_root=str(root),
            config=current,
            max_depth=effective_depth,
            exclude=_excludes(current),
        )))
        return
    click.echo(f"Project root: {root}")
    click.echo(f"max_depth: {effective_depth}  (env {MAX_DEPTH_ENV} overrides)")
    excludes = _excludes(current)
    click.echo(f"exclude: {', '.join(excludes) if excludes else '(none)'}")
