from pathmark.cli import cli

cli()
