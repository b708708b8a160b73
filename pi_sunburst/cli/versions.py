"""CLI command for listing PI versions."""

import typer
from rich.table import Table

from ..errors import JiraError
from ..jira_client.versions import VersionCatalog
from .common import (
    configure_logging,
    console,
    create_client,
    exit_for_jira_error,
    get_config,
)
from .options import PROJECT_OPTION, VERBOSE_OPTION


def versions(
    project: str = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List PI versions of a project that contain at least one Goal."""
    configure_logging(verbose)
    config = get_config()

    try:
        with create_client(config) as client:
            catalog = VersionCatalog(
                client, ttl_seconds=config.limits.version_cache_ttl
            )
            listing = catalog.get(project)
    except JiraError as e:
        raise exit_for_jira_error(e)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    if not listing.versions:
        console.print(f"No PI versions with goals found for {project}")
        return

    table = Table(title=f"PI versions for {project.upper()}")
    table.add_column("Name", style="cyan")
    table.add_column("Released")
    table.add_column("Default", style="green")

    for version in listing.versions:
        table.add_row(
            version.name,
            "yes" if version.released else "no",
            "★" if version.name == listing.default_pi else "",
        )

    console.print(table)
