"""Show cyclomatic complexity markers using the same anchors as NPath."""

from __future__ import annotations

import click

from pathmark.commands.markers import run_marker_command


@click.command("cyclomatic")
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--all", "show_all", is_flag=True, help="Include anchors whose complexity is 1")
@click.pass_context
def cyclomatic(ctx, paths, show_all):
    """Show McCabe cyclomatic complexity next to each anchor in PATHS."""
    run_marker_command(ctx, "cyclomatic", "cyclomatic", paths, show_all)
