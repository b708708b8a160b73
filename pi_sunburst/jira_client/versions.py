"""Listing of Program Increment versions that have Goals."""

import logging
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..cache import TTLCache
from ..errors import JiraError
from .models import JiraVersion
from .search import build_goal_query

logger = logging.getLogger(__name__)

MINIMUM_PI = "PI28"


class VersionStore(Protocol):
    """What the version listing needs from an issue store."""

    def get_project_versions(self, project_key: str) -> list[JiraVersion]: ...

    def count_issues(self, jql: str) -> int: ...


class VersionSummary(BaseModel):
    """A PI version offered for selection."""

    id: str | None = None
    name: str
    released: bool = False


class VersionListing(BaseModel):
    """PI versions that have Goals, plus the PI to preselect."""

    model_config = ConfigDict(populate_by_name=True)

    versions: list[VersionSummary] = Field(default_factory=list)
    default_pi: str | None = Field(
        None, alias="defaultPi", description="First unreleased version, if any"
    )


def is_pi_version(name: str | None, minimum: str = MINIMUM_PI) -> bool:
    """Check that a version name looks like a PI at or after ``minimum``.

    Comparison is case-insensitive and lexicographic.
    """
    if not name:
        return False
    folded = name.casefold()
    return folded.startswith("pi") and folded >= minimum.casefold()


def list_pi_versions(
    store: VersionStore, project: str, minimum: str = MINIMUM_PI
) -> VersionListing:
    """List a project's PI versions that contain at least one Goal.

    Versions are sorted newest name first. If counting the Goals of a version
    fails, the version is kept rather than hidden.

    Args:
        store: Store providing versions and issue counts
        project: Project key to list versions for
        minimum: Oldest PI name to include

    Returns:
        VersionListing with the kept versions and the default PI
    """
    candidates = [
        VersionSummary(id=version.id, name=version.name, released=version.released)
        for version in store.get_project_versions(project)
        if version.name and is_pi_version(version.name, minimum)
    ]
    candidates.sort(key=lambda version: version.name.casefold(), reverse=True)

    kept: list[VersionSummary] = []
    for version in candidates:
        try:
            if store.count_issues(build_goal_query(version.name, project)) > 0:
                kept.append(version)
        except JiraError as e:
            logger.warning("Failed to verify data for version %s: %s", version.name, e)
            kept.append(version)

    default_pi = next((v.name for v in kept if not v.released), None)
    return VersionListing(versions=kept, default_pi=default_pi)


class VersionCatalog:
    """Version listings cached per project key."""

    def __init__(self, store: VersionStore, ttl_seconds: float = 300.0):
        self.store = store
        self.cache: TTLCache[VersionListing] = TTLCache(
            ttl_seconds, label="versions"
        )

    def get(self, project: str) -> VersionListing:
        """Return the listing for ``project``, from cache when still fresh.

        Raises:
            ValueError: If ``project`` is blank
            JiraError: If the versions themselves cannot be fetched
        """
        project = project.strip()
        if not project:
            raise ValueError("project is required")

        cache_key = project.upper()
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        listing = list_pi_versions(self.store, project)
        self.cache.set(cache_key, listing)
        return listing
