"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .sunburst import relationships, sunburst
from .versions import versions

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="pi-sunburst",
    help="Program Increment sunburst built from Jira issue links",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="sunburst", context_settings={"help_option_names": ["-h", "--help"]})(
    sunburst
)
app.command(
    name="relationships", context_settings={"help_option_names": ["-h", "--help"]}
)(relationships)
app.command(name="versions", context_settings={"help_option_names": ["-h", "--help"]})(
    versions
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from pi_sunburst import __version__

    console.print(f"PI Sunburst v{__version__}")


if __name__ == "__main__":
    app()
