"""Pydantic models for Jira data structures.

These models map directly to Jira's REST API v2 response structures and are
the only place raw Jira payloads are validated.
API Reference: https://docs.atlassian.com/software/jira/docs/api/REST/latest/
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JiraModel(BaseModel):
    """Base model accepting both Jira's camelCase keys and snake_case names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class JiraStatusCategory(JiraModel):
    """Jira status category (To Do / In Progress / Done)."""

    name: str | None = Field(None, description="Display name of the category")
    key: str | None = Field(
        None, description="Stable category key: 'new', 'indeterminate', 'done'"
    )


class JiraStatus(JiraModel):
    """Workflow status of an issue."""

    name: str = Field("", description="Workflow status name (e.g. 'Implementing')")
    status_category: JiraStatusCategory | None = Field(
        None, alias="statusCategory", description="Category the status belongs to"
    )


class JiraIssueType(JiraModel):
    """Issue type as configured in the Jira instance."""

    name: str | None = Field(None, description="Issue type name (e.g. 'Goal')")


class JiraProject(JiraModel):
    """Project an issue belongs to."""

    key: str = Field("", description="Project key (e.g. 'TPO')")
    name: str | None = Field(None, description="Project display name")


class JiraVersion(JiraModel):
    """Project version, used as a fix version and as the PI identifier.

    API Reference: /rest/api/2/project/{projectKey}/versions
    """

    id: str | None = Field(None, description="Version identifier")
    name: str | None = Field(None, description="Version name (e.g. 'PI30')")
    released: bool = Field(False, description="Whether the version is released")


class JiraUser(JiraModel):
    """Assignee projection; only the display name is consumed."""

    display_name: str | None = Field(None, alias="displayName")


class JiraOption(JiraModel):
    """Value of a multi-select custom field."""

    value: str | None = None


class JiraIssueLinkType(JiraModel):
    """Typed link definition with its two directional labels."""

    name: str | None = Field(None, description="Link type name")
    inward: str | None = Field(None, description="Label read from the inward side")
    outward: str | None = Field(None, description="Label read from the outward side")


class JiraIssueRef(JiraModel):
    """Reference to the issue on the other end of a link."""

    key: str | None = None


class JiraIssueLink(JiraModel):
    """One issue link. Exactly one of the two endpoints is normally present."""

    type: JiraIssueLinkType = Field(default_factory=JiraIssueLinkType)
    inward_issue: JiraIssueRef | None = Field(None, alias="inwardIssue")
    outward_issue: JiraIssueRef | None = Field(None, alias="outwardIssue")


class JiraIssueFields(JiraModel):
    """The subset of issue fields requested by the client."""

    summary: str = ""
    issuetype: JiraIssueType | None = None
    status: JiraStatus | None = None
    project: JiraProject | None = None
    fix_versions: list[JiraVersion] = Field(default_factory=list, alias="fixVersions")
    issuelinks: list[JiraIssueLink] = Field(default_factory=list)
    assignee: JiraUser | None = None
    telescope: list[JiraOption] | None = Field(
        None,
        alias="customfield_12001",
        description="Telescope multi-select custom field (extra labels)",
    )

    @field_validator("summary", mode="before")
    @classmethod
    def _null_summary(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("fix_versions", "issuelinks", mode="before")
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        # Jira sends null for empty list fields on some instances
        return [] if value is None else value


class JiraIssue(JiraModel):
    """Jira issue as returned by /rest/api/2/search."""

    id: str | None = None
    key: str
    fields: JiraIssueFields = Field(default_factory=JiraIssueFields)


class JiraSearchResponse(JiraModel):
    """One page of search results."""

    issues: list[JiraIssue] = Field(default_factory=list)
    start_at: int = Field(0, alias="startAt")
    max_results: int = Field(0, alias="maxResults")
    total: int = 0
