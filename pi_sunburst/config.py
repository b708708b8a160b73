"""Application configuration loaded from environment variables."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

REQUIRED_ENV_VARS = ("JIRA_BASE_URL", "JIRA_TOKEN")


class JiraSettings(BaseModel):
    """Connection and traversal settings for the Jira instance."""

    base_url: str = Field(..., description="Jira base URL without trailing slash")
    token: str = Field(..., description="Personal access token (Bearer auth)")
    reject_unauthorized: bool = Field(
        True, description="Verify TLS certificates of the Jira host"
    )
    request_timeout: float = Field(
        10.0, gt=0, description="Per-request timeout in seconds"
    )
    traversal_timeout: float = Field(
        30.0, gt=0, description="Wall-clock budget for one traversal in seconds"
    )
    goal_project: str = Field("TPO", description="Project holding the Goal issues")

    @property
    def browse_base_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/browse"


class LimitSettings(BaseModel):
    """Output and cache limits."""

    max_nodes: int = Field(1500, gt=0, description="Node cap per traversal")
    version_cache_ttl: float = Field(
        300.0, gt=0, description="Seconds a version listing stays cached"
    )
    result_cache_ttl: float = Field(
        60.0, gt=0, description="Seconds a traversal result stays cached"
    )


class AppConfig(BaseModel):
    """Top-level configuration."""

    jira: JiraSettings
    limits: LimitSettings = Field(default_factory=LimitSettings)


def parse_bool(value: str | None, fallback: bool) -> bool:
    """Parse a boolean environment value.

    Only ``true``/``1`` and ``false``/``0`` are recognised; anything else
    (including unset) yields ``fallback``.
    """
    if value is None:
        return fallback
    if value in ("true", "1"):
        return True
    if value in ("false", "0"):
        return False
    return fallback


def _ms_to_seconds(value: str | None, default_ms: int) -> float:
    if value is None or value.strip() == "":
        return default_ms / 1000
    try:
        return float(value) / 1000
    except ValueError:
        raise ValueError(f"Expected a number of milliseconds, got '{value}'")


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    """Build the application configuration from environment variables.

    Args:
        env: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Validated AppConfig

    Raises:
        ValueError: If required variables are missing or values are invalid
    """
    if env is None:
        env = os.environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    if missing:
        raise ValueError(
            f"Environment variables required for Jira access: {', '.join(missing)}"
        )

    jira = JiraSettings(
        base_url=env["JIRA_BASE_URL"].rstrip("/"),
        token=env["JIRA_TOKEN"],
        reject_unauthorized=parse_bool(env.get("JIRA_REJECT_UNAUTHORIZED"), True),
        request_timeout=_ms_to_seconds(env.get("JIRA_REQUEST_TIMEOUT_MS"), 10_000),
        traversal_timeout=_ms_to_seconds(
            env.get("JIRA_TRAVERSAL_TIMEOUT_MS"), 30_000
        ),
        goal_project=env.get("JIRA_GOAL_PROJECT") or "TPO",
    )

    limits = LimitSettings(
        max_nodes=int(env.get("SUNBURST_MAX_NODES") or 1500),
        version_cache_ttl=_ms_to_seconds(env.get("VERSION_CACHE_TTL_MS"), 300_000),
        result_cache_ttl=_ms_to_seconds(env.get("RESULT_CACHE_TTL_MS"), 60_000),
    )

    return AppConfig(jira=jira, limits=limits)
