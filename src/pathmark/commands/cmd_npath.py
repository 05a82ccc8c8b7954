"""Show NPath complexity markers for declarations and control keywords."""

from __future__ import annotations

import click

from pathmark.commands.markers import run_marker_command


@click.command("npath")
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--all", "show_all", is_flag=True, help="Include anchors whose NPath is not applicable (<= 1)")
@click.pass_context
def npath(ctx, paths, show_all):
    """Show NPath complexity next to each anchor in PATHS.

    Anchors are method and type names plus the keywords ``if``, ``else``,
    ``while``, ``do``, ``for``, ``switch``, ``case``, ``try`` and ``catch``.
    Directories are searched recursively; the current directory is used
    when no path is given.
    """
    run_marker_command(ctx, "npath", "npath", paths, show_all)
