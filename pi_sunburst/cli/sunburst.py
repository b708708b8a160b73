"""CLI commands for building the PI sunburst."""

from collections import Counter
from pathlib import Path

import typer
from rich.table import Table

from ..errors import JiraError
from ..service import SunburstService
from ..sunburst.hierarchy import build_hierarchy, hierarchy_to_dict
from ..sunburst.models import IssueMeta, TraversalResult
from .common import (
    configure_logging,
    console,
    create_client,
    exit_for_jira_error,
    get_config,
    write_json,
)
from .options import (
    ISSUE_KEY_OPTION,
    MAX_NODES_OPTION,
    OUTPUT_OPTION,
    PI_OPTION,
    TREE_OPTION,
    VERBOSE_OPTION,
)

RING_NAMES = {1: "Goals", 2: "Impacts", 3: "Delivery items", 4: "Objectives"}

app = typer.Typer(
    help="Build the PI sunburst from Jira",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _summary_table(result: TraversalResult) -> Table:
    depth_counts = Counter(node.depth for node in result.nodes)

    table = Table(title=f"Sunburst for {result.pi}")
    table.add_column("Ring", style="cyan")
    table.add_column("Nodes", style="green", justify="right")

    for depth, name in RING_NAMES.items():
        table.add_row(name, str(depth_counts.get(depth, 0)))
    table.add_row("Unique issues", str(len(result.meta.issues)))
    table.add_row("Truncated", "yes" if result.truncated else "no")
    return table


@app.command()
def sunburst(
    pi: str = PI_OPTION,
    output: Path | None = OUTPUT_OPTION,
    tree: bool = TREE_OPTION,
    max_nodes: int | None = MAX_NODES_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Traverse Goals, Impacts, delivery items and Objectives of a PI.

    Examples:
        pi-sunburst sunburst --pi PI30 --output pi30.json
        pi-sunburst sunburst --pi PI30 --tree > pi30-tree.json
    """
    configure_logging(verbose)
    config = get_config()

    if max_nodes is not None:
        if max_nodes <= 0:
            console.print("❌ Error: --max-nodes must be positive")
            raise typer.Exit(1)
        config.limits.max_nodes = max_nodes

    console.print(f"🔍 Traversing {config.jira.goal_project} goals for {pi}")

    try:
        with create_client(config) as client:
            result = SunburstService(client, config).get_traversal(pi)
    except JiraError as e:
        raise exit_for_jira_error(e)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    console.print(_summary_table(result))
    for warning in result.warnings:
        console.print(f"⚠️  {warning}")

    if tree:
        root = build_hierarchy(result)
        payload = hierarchy_to_dict(root) if root else {}
    else:
        payload = result.to_json_dict()

    write_json(payload, output)


def _relationship_table(title: str, metas: list[IssueMeta]) -> Table:
    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Type")
    table.add_column("Status", style="green")
    table.add_column("Summary")

    for meta in metas:
        table.add_row(meta.key, meta.type.value, meta.status, meta.summary)
    return table


@app.command()
def relationships(
    pi: str = PI_OPTION,
    key: str = ISSUE_KEY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the direct parents and children of an issue within a PI."""
    configure_logging(verbose)
    config = get_config()

    try:
        with create_client(config) as client:
            related = SunburstService(client, config).get_relationships(pi, key)
    except JiraError as e:
        raise exit_for_jira_error(e)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    if not related.parents and not related.children:
        console.print(f"No relationships found for {key} in {pi}")
        return

    console.print(_relationship_table(f"Parents of {key}", related.parents))
    console.print(_relationship_table(f"Children of {key}", related.children))
