"""Shared helpers for CLI commands."""

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from ..config import AppConfig, load_config
from ..errors import JiraError
from ..jira_client.client import JiraClient

# Status output goes to stderr so JSON on stdout stays pipeable
console = Console(stderr=True)

EXIT_CONFIG_ERROR = 1
EXIT_BAD_GATEWAY = 2
EXIT_GATEWAY_TIMEOUT = 4


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def get_config() -> AppConfig:
    """Load configuration or exit with a readable message."""
    try:
        return load_config()
    except ValueError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)


def create_client(config: AppConfig) -> JiraClient:
    return JiraClient(config.jira)


def exit_for_jira_error(error: JiraError) -> typer.Exit:
    """Report a Jira failure and build the matching exit.

    Timeouts map to the gateway-timeout exit code, everything else to the
    bad-gateway one.
    """
    if error.is_timeout:
        console.print(f"⏱️  Gateway timeout: {error.message}")
        return typer.Exit(EXIT_GATEWAY_TIMEOUT)

    console.print(f"❌ Bad gateway: {error.message} (status {error.status})")
    return typer.Exit(EXIT_BAD_GATEWAY)


def write_json(payload: dict[str, Any], output: Path | None) -> None:
    """Write JSON to ``output``, or to stdout when no file is given."""
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"💾 Wrote {output}")
