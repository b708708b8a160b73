"""Pydantic models for the traversal result and the aggregated hierarchy.

Python attributes are snake_case; the JSON consumed by renderers uses the
camelCase aliases (serialize with ``model_dump(by_alias=True)``).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IssueType(str, Enum):
    """Canonical issue types that can appear in the hierarchy."""

    GOAL = "Goal"
    IMPACT = "Impact"
    # Delivery item; capabilities and program backlog items fold into it
    FEATURE = "Feature"
    STORY = "Story"
    ENABLER = "Enabler"
    SPIKE = "Spike"
    OBJECTIVE = "Objective"


class StatusCategory(str, Enum):
    """Canonical status categories."""

    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


STATUS_CATEGORIES = [
    StatusCategory.TO_DO,
    StatusCategory.IN_PROGRESS,
    StatusCategory.DONE,
]


class SunburstModel(BaseModel):
    """Base for models serialized to renderer JSON."""

    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Link(SunburstModel):
    """One typed issue link as seen from the issue that carries it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    label_outward: str | None = Field(None, description="Outward label of the type")
    label_inward: str | None = Field(None, description="Inward label of the type")
    outward_key: str | None = Field(None, description="Key of the outward endpoint")
    inward_key: str | None = Field(None, description="Key of the inward endpoint")


class IssueMeta(SunburstModel):
    """Public projection of a classified issue."""

    key: str
    type: IssueType
    summary: str = ""
    status: str = ""
    status_category: StatusCategory = Field(..., alias="statusCategory")
    project: str = ""
    fix_versions: list[str] = Field(default_factory=list, alias="fixVersions")
    assignee: str | None = None
    extra_labels: list[str] = Field(default_factory=list, alias="telescope")


class Issue(IssueMeta):
    """Classified issue including its links. Immutable once built."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    links: list[Link] = Field(default_factory=list)

    def to_meta(self) -> IssueMeta:
        """Drop link data, keeping only the public fields."""
        return IssueMeta.model_validate(self.model_dump(exclude={"links"}))


class PathNode(SunburstModel):
    """One emitted node: the chain of keys from the PI down to this issue."""

    path: list[str] = Field(..., min_length=2, max_length=5)
    id: str
    label: str
    status_category: StatusCategory = Field(..., alias="statusCategory")

    @property
    def depth(self) -> int:
        return len(self.path) - 1


class TraversalMeta(SunburstModel):
    """Metadata keyed by issue key; one entry per key referenced by any path."""

    issues: dict[str, IssueMeta] = Field(default_factory=dict)


class TraversalResult(SunburstModel):
    """Flat path list produced by one traversal of a PI."""

    pi: str
    truncated: bool = False
    nodes: list[PathNode] = Field(default_factory=list)
    meta: TraversalMeta = Field(default_factory=TraversalMeta)
    warnings: list[str] = Field(default_factory=list)
    browse_base_url: str | None = Field(None, alias="browseBaseUrl")


class HierarchyNodeData(SunburstModel):
    """Renderer payload attached to each hierarchy node."""

    issue_key: str | None = Field(None, alias="issueKey")
    status_category: StatusCategory | None = Field(None, alias="statusCategory")
    status: str | None = None
    label: str | None = None
    path: list[str]
    type: IssueType | None = None
    assignee: str | None = None
    depth: int


class HierarchyNode(SunburstModel):
    """Weighted tree node. Children only; no parent pointers."""

    id: str
    name: str
    value: float = 0.0
    color: str | None = None
    children: list["HierarchyNode"] = Field(default_factory=list)
    data: HierarchyNodeData

    def walk(self) -> list["HierarchyNode"]:
        """Return this node and all descendants in depth-first pre-order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


class IssueRelationships(SunburstModel):
    """Direct parents and children of one issue across all emitted paths."""

    parents: list[IssueMeta] = Field(default_factory=list)
    children: list[IssueMeta] = Field(default_factory=list)

