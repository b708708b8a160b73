"""Tests for PI version listing."""

import pytest

from pi_sunburst.errors import JiraError
from pi_sunburst.jira_client.models import JiraVersion
from pi_sunburst.jira_client.search import build_goal_query
from pi_sunburst.jira_client.versions import (
    VersionCatalog,
    is_pi_version,
    list_pi_versions,
)


class FakeVersionStore:
    """Version store with canned versions and per-version Goal counts."""

    def __init__(self, versions: list[dict], goal_counts: dict[str, int | Exception]):
        self.versions = [JiraVersion.model_validate(v) for v in versions]
        self.goal_counts = goal_counts
        self.version_calls: list[str] = []
        self.count_queries: list[str] = []

    def get_project_versions(self, project_key: str) -> list[JiraVersion]:
        self.version_calls.append(project_key)
        return self.versions

    def count_issues(self, jql: str) -> int:
        self.count_queries.append(jql)
        for name, count in self.goal_counts.items():
            if jql == build_goal_query(name, "SP"):
                if isinstance(count, Exception):
                    raise count
                return count
        return 0


@pytest.fixture
def version_store() -> FakeVersionStore:
    return FakeVersionStore(
        versions=[
            {"id": "1", "name": "PI27", "released": True},
            {"id": "2", "name": "PI28", "released": True},
            {"id": "3", "name": "pi29", "released": True},
            {"id": "4", "name": "PI30", "released": False},
            {"id": "5", "name": "PI31", "released": False},
            {"id": "6", "name": "Release 1"},
            {"id": "7"},
        ],
        goal_counts={
            "PI28": 1,
            "pi29": JiraError("Jira timeout", 504),
            "PI30": 3,
            "PI31": 0,
        },
    )


class TestIsPiVersion:
    """Test PI name filtering."""

    @pytest.mark.parametrize("name", ["PI28", "pi28", "PI30", "PI9", "Pi28.1"])
    def test_accepted(self, name: str) -> None:
        assert is_pi_version(name)

    @pytest.mark.parametrize("name", [None, "", "PI27", "PI100", "Release 1", "API30"])
    def test_rejected(self, name: str | None) -> None:
        """Comparison is lexicographic, so 'PI100' sorts before 'PI28'."""
        assert not is_pi_version(name)

    def test_custom_minimum(self) -> None:
        assert is_pi_version("PI27", minimum="PI20")


class TestListPiVersions:
    """Test the filtered, sorted listing."""

    def test_listing(self, version_store: FakeVersionStore) -> None:
        listing = list_pi_versions(version_store, "SP")

        assert [v.name for v in listing.versions] == ["PI30", "pi29", "PI28"]
        assert listing.default_pi == "PI30"
        assert version_store.version_calls == ["SP"]

    def test_goal_counts_use_goal_query(self, version_store: FakeVersionStore) -> None:
        list_pi_versions(version_store, "SP")

        assert version_store.count_queries == [
            build_goal_query(name, "SP") for name in ["PI31", "PI30", "pi29", "PI28"]
        ]

    def test_count_failure_keeps_version(
        self, version_store: FakeVersionStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("WARNING"):
            listing = list_pi_versions(version_store, "SP")

        assert "pi29" in [v.name for v in listing.versions]
        assert "Failed to verify data for version pi29" in caplog.text

    def test_no_unreleased_version(self) -> None:
        store = FakeVersionStore(
            versions=[{"id": "1", "name": "PI30", "released": True}],
            goal_counts={"PI30": 2},
        )

        listing = list_pi_versions(store, "SP")

        assert [v.name for v in listing.versions] == ["PI30"]
        assert listing.default_pi is None

    def test_json_alias(self, version_store: FakeVersionStore) -> None:
        payload = list_pi_versions(version_store, "SP").model_dump(by_alias=True)

        assert payload["defaultPi"] == "PI30"
        assert payload["versions"][0] == {"id": "4", "name": "PI30", "released": False}


class TestVersionCatalog:
    """Test per-project caching of listings."""

    def test_cached_per_project(self, version_store: FakeVersionStore) -> None:
        catalog = VersionCatalog(version_store)

        first = catalog.get("SP")
        second = catalog.get(" sp ")

        assert first is second
        assert version_store.version_calls == ["SP"]

    def test_invalidate(self, version_store: FakeVersionStore) -> None:
        catalog = VersionCatalog(version_store)
        catalog.get("SP")

        catalog.cache.invalidate()
        catalog.get("SP")

        assert version_store.version_calls == ["SP", "SP"]

    def test_blank_project(self, version_store: FakeVersionStore) -> None:
        with pytest.raises(ValueError, match="project is required"):
            VersionCatalog(version_store).get("  ")

    def test_listing_failure_is_not_cached(self) -> None:
        class FailingStore(FakeVersionStore):
            def get_project_versions(self, project_key: str) -> list[JiraVersion]:
                raise JiraError("Jira auth failed", 401)

        catalog = VersionCatalog(FailingStore([], {}))

        with pytest.raises(JiraError):
            catalog.get("SP")
        assert len(catalog.cache) == 0
