"""Test configuration and fixtures."""

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from pi_sunburst.jira_client.models import JiraIssue


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeIssueStore:
    """In-memory issue store answering Goal queries and key lookups."""

    def __init__(
        self,
        issues: Sequence[JiraIssue],
        goal_keys: Sequence[str] | None = None,
        on_call: Callable[[str], None] | None = None,
    ):
        self.issues = {issue.key: issue for issue in issues}
        self.goal_keys = (
            list(goal_keys)
            if goal_keys is not None
            else [
                issue.key
                for issue in issues
                if issue.fields.issuetype
                and (issue.fields.issuetype.name or "").lower() == "goal"
            ]
        )
        self.on_call = on_call
        self.queries: list[str] = []
        self.key_batches: list[list[str]] = []

    def search_issues(self, jql: str) -> list[JiraIssue]:
        self.queries.append(jql)
        if self.on_call:
            self.on_call("search")
        return [self.issues[key] for key in self.goal_keys]

    def fetch_issues_by_keys(self, keys: Sequence[str]) -> list[JiraIssue]:
        self.key_batches.append(list(keys))
        if self.on_call:
            self.on_call("fetch")
        return [self.issues[key] for key in keys if key in self.issues]

    def __enter__(self) -> "FakeIssueStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        pass


def _link(
    outward: str | None = None,
    inward: str | None = None,
    outward_key: str | None = None,
    inward_key: str | None = None,
    name: str | None = None,
) -> dict[str, Any]:
    link: dict[str, Any] = {
        "type": {
            "name": name or outward or inward,
            "outward": outward,
            "inward": inward,
        }
    }
    if outward_key:
        link["outwardIssue"] = {"key": outward_key}
    if inward_key:
        link["inwardIssue"] = {"key": inward_key}
    return link


def _raw_issue(
    key: str,
    type_name: str | None,
    category: str | None = "To Do",
    status: str | None = None,
    links: list[dict[str, Any]] | None = None,
    fix_versions: list[str] | None = None,
    project: str | None = None,
    assignee: str | None = None,
    telescope: list[str] | None = None,
) -> JiraIssue:
    return JiraIssue.model_validate(
        {
            "id": f"id-{key}",
            "key": key,
            "fields": {
                "summary": f"Summary of {key}",
                "issuetype": {"name": type_name},
                "status": {
                    "name": status or category or "Unknown",
                    "statusCategory": {"name": category, "key": "k"},
                },
                "project": {"key": project or key.split("-")[0], "name": "Project"},
                "fixVersions": [
                    {"id": str(i), "name": name, "released": False}
                    for i, name in enumerate(fix_versions or [])
                ],
                "issuelinks": links or [],
                "assignee": {"displayName": assignee} if assignee else None,
                "customfield_12001": (
                    [{"value": value} for value in telescope] if telescope else None
                ),
            },
        }
    )


@pytest.fixture
def make_link() -> Callable[..., dict[str, Any]]:
    """Factory for raw Jira issue link payloads."""
    return _link


@pytest.fixture
def make_issue() -> Callable[..., JiraIssue]:
    """Factory for raw Jira issues."""
    return _raw_issue


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store_factory() -> Callable[..., FakeIssueStore]:
    return FakeIssueStore


@pytest.fixture
def pi30_issues() -> list[JiraIssue]:
    """One Goal, one Impact, a Story and a Program Backlog Item, one Objective.

    The Impact links to its delivery items with variant "realised by" labels.
    """
    goal = _raw_issue(
        "TPO-1042",
        "Goal",
        category="In Progress",
        fix_versions=["PI30"],
        telescope=["Observatory"],
        links=[
            _link(
                outward="is achieved through",
                inward="helps achieve",
                outward_key="TPO-IMP-200",
                name="achieved through",
            )
        ],
    )
    impact = _raw_issue(
        "TPO-IMP-200",
        "Impact",
        category="To Do",
        links=[
            _link(
                outward="Realised by (delivery)",
                inward="realises",
                outward_key="SP-2001",
                name="Realised by (SP)",
            ),
            _link(
                outward="is realised by backlog",
                inward="realises",
                outward_key="SP-5964",
                name="Realised by (SP)",
            ),
        ],
    )
    story = _raw_issue(
        "SP-2001",
        "Story",
        category="Done",
        links=[
            _link(outward="relates to", inward="relates to", outward_key="SPO-3001")
        ],
    )
    objective = _raw_issue("SPO-3001", "Objective", category="In Progress")
    backlog_item = _raw_issue(
        "SP-5964",
        "Program Backlog Item",
        category="In Progress",
        status="Implementing",
    )
    return [goal, impact, story, objective, backlog_item]
