"""Leveled traversal from a Program Increment down to Objectives.

The traversal walks four rings, one batched store call per ring:

    PI --(fixVersion query)--> Goal --(achieved through)--> Impact
       --(realised by)--> Feature/Story/Enabler/Spike --(relates to)--> Objective

Every ring is fully resolved before the next starts, because the next ring's
key set depends on the whole classified parent set.
"""

import logging
import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from ..errors import TraversalTimeoutError
from ..jira_client.models import JiraIssue
from ..jira_client.search import build_goal_query
from .classifier import classify_all
from .links import HopKind, collect_linked_keys
from .models import (
    Issue,
    IssueMeta,
    IssueType,
    PathNode,
    TraversalMeta,
    TraversalResult,
)

logger = logging.getLogger(__name__)

DEFAULT_GOAL_PROJECT = "TPO"


class IssueStore(Protocol):
    """What the traversal needs from an issue store."""

    def search_issues(self, jql: str) -> list[JiraIssue]:
        """Return all issues matching a JQL query, paginated by the store."""
        ...

    def fetch_issues_by_keys(self, keys: Sequence[str]) -> list[JiraIssue]:
        """Return the issues for ``keys``; unknown keys are ignored."""
        ...


@dataclass(frozen=True)
class RingLevel:
    """How to reach one ring from the ring above it."""

    name: str
    hop: HopKind
    child_types: frozenset[IssueType]


GOAL_TYPES = frozenset({IssueType.GOAL})

RING_LEVELS: tuple[RingLevel, ...] = (
    RingLevel("impact", HopKind.ACHIEVED_THROUGH, frozenset({IssueType.IMPACT})),
    RingLevel(
        "item",
        HopKind.REALISED_BY,
        frozenset(
            {IssueType.FEATURE, IssueType.STORY, IssueType.ENABLER, IssueType.SPIKE}
        ),
    ),
    RingLevel("objective", HopKind.RELATES_TO, frozenset({IssueType.OBJECTIVE})),
)


@dataclass
class Ring:
    """Resolved issues of one ring and the adjacency from the ring above.

    ``children_by_parent`` maps a parent key (in the ring above) to the keys of
    its children in this ring, in link order. Every child key is present in
    ``issues``.
    """

    issues: dict[str, Issue] = field(default_factory=dict)
    children_by_parent: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class Emission:
    """Outcome of emitting path nodes under a node cap."""

    nodes: list[PathNode]
    meta: dict[str, IssueMeta]
    truncated: bool


def truncation_warning(max_nodes: int) -> str:
    return f"Too many nodes; showing first {max_nodes:,}"


class _Deadline:
    """Absolute wall-clock deadline checked cooperatively between store calls."""

    def __init__(self, budget: float, clock: Callable[[], float]):
        self._clock = clock
        self.expires_at = clock() + budget

    def ensure(self) -> None:
        if self._clock() > self.expires_at:
            raise TraversalTimeoutError()


def _resolve_ring(
    store: IssueStore,
    parents: Sequence[Issue],
    level: RingLevel,
    deadline: _Deadline,
) -> Ring:
    """Follow ``level.hop`` from every parent and fetch the linked issues.

    Linked keys are collected per parent and deduplicated across the ring,
    fetched in one batched call, classified, and then filtered to the ring's
    expected types. Parents keep only the children that survived.
    """
    linked_by_parent: dict[str, list[str]] = {}
    ring_keys: dict[str, None] = {}

    for parent in parents:
        linked = collect_linked_keys(parent, level.hop)
        linked_by_parent[parent.key] = linked
        for key in linked:
            ring_keys.setdefault(key, None)

    deadline.ensure()

    issues: dict[str, Issue] = {}
    if ring_keys:
        fetched = store.fetch_issues_by_keys(list(ring_keys))
        deadline.ensure()
        for issue in classify_all(fetched):
            if issue.type in level.child_types and issue.key in ring_keys:
                issues[issue.key] = issue

    logger.debug(
        "Ring %s: %d linked keys, %d classified",
        level.name,
        len(ring_keys),
        len(issues),
    )

    return Ring(
        issues=issues,
        children_by_parent={
            parent_key: [key for key in linked if key in issues]
            for parent_key, linked in linked_by_parent.items()
        },
    )


def _walk(
    path: list[str], issue: Issue, rings: Sequence[Ring], depth: int
) -> Iterator[tuple[list[str], Issue]]:
    yield path, issue
    if depth >= len(rings):
        return
    ring = rings[depth]
    for child_key in ring.children_by_parent.get(issue.key, []):
        yield from _walk(path + [child_key], ring.issues[child_key], rings, depth + 1)


def emit_path_nodes(
    pi: str, goals: Sequence[Issue], rings: Sequence[Ring], max_nodes: int
) -> Emission:
    """Emit one PathNode per reachable issue, depth first, under a node cap.

    Emission stops as soon as another node would exceed ``max_nodes``; in that
    case the result is marked truncated. Metadata is recorded for every emitted
    key, first writer wins.

    Args:
        pi: Traversal root identifier, used as ``path[0]``
        goals: Goals in query order
        rings: Impact, item and objective rings, in that order
        max_nodes: Maximum number of nodes to emit

    Returns:
        Emission with the nodes, metadata and truncation flag
    """
    nodes: list[PathNode] = []
    meta: dict[str, IssueMeta] = {}

    for goal in goals:
        for path, issue in _walk([pi, goal.key], goal, rings, 0):
            if len(nodes) >= max_nodes:
                return Emission(nodes=nodes, meta=meta, truncated=True)

            if issue.key not in meta:
                meta[issue.key] = issue.to_meta()

            nodes.append(
                PathNode(
                    path=path,
                    id=issue.key,
                    label=f"{issue.key} · {issue.type.value}",
                    status_category=issue.status_category,
                )
            )

    return Emission(nodes=nodes, meta=meta, truncated=False)


def build_traversal(
    store: IssueStore,
    pi: str,
    *,
    max_nodes: int = 1500,
    traversal_timeout: float = 30.0,
    project: str = DEFAULT_GOAL_PROJECT,
    browse_base_url: str | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> TraversalResult:
    """Traverse the hierarchy below a PI and return the flat path list.

    Args:
        store: Issue store to query
        pi: Program Increment (fix version name) to start from
        max_nodes: Node cap; hitting it truncates the result
        traversal_timeout: Wall-clock budget in seconds for the whole call
        project: Project holding the Goals
        browse_base_url: Base URL for issue links, passed through to the result
        clock: Monotonic clock in seconds

    Returns:
        TraversalResult with nodes, metadata, truncation flag and warnings

    Raises:
        TraversalTimeoutError: If the budget runs out before a planned store call
        JiraError: Store failures are propagated unchanged
    """
    if max_nodes <= 0:
        raise ValueError("max_nodes must be positive")

    deadline = _Deadline(traversal_timeout, clock)

    deadline.ensure()
    goal_issues = store.search_issues(build_goal_query(pi, project))
    deadline.ensure()

    goals = [issue for issue in classify_all(goal_issues) if issue.type in GOAL_TYPES]
    logger.debug("PI %s: %d goals", pi, len(goals))

    if not goals:
        return TraversalResult(pi=pi, browse_base_url=browse_base_url)

    rings: list[Ring] = []
    parents: list[Issue] = goals
    for level in RING_LEVELS:
        ring = _resolve_ring(store, parents, level, deadline)
        rings.append(ring)
        parents = list(ring.issues.values())

    emission = emit_path_nodes(pi, goals, rings, max_nodes)

    warnings: list[str] = []
    if emission.truncated:
        logger.info("PI %s: node cap of %d reached, result truncated", pi, max_nodes)
        warnings.append(truncation_warning(max_nodes))

    return TraversalResult(
        pi=pi,
        truncated=emission.truncated,
        nodes=emission.nodes,
        meta=TraversalMeta(issues=emission.meta),
        warnings=warnings,
        browse_base_url=browse_base_url,
    )
