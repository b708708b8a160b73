"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

PI_OPTION = typer.Option(..., "--pi", "-p", help="Program Increment (e.g. PI30)")

PROJECT_OPTION = typer.Option(
    ..., "--project", help="Jira project key to list PI versions for"
)

ISSUE_KEY_OPTION = typer.Option(..., "--key", "-k", help="Jira issue key")

OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Write JSON to this file instead of stdout"
)

TREE_OPTION = typer.Option(
    False, "--tree/--no-tree", help="Emit the aggregated hierarchy instead of paths"
)

MAX_NODES_OPTION = typer.Option(
    None, "--max-nodes", help="Node cap (defaults to SUNBURST_MAX_NODES or 1500)"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
