"""Aggregation of traversal paths into a weighted tree for radial charts."""

from typing import Any

from ..errors import MalformedPathError
from .colors import ROOT_COLOR, get_status_color
from .models import (
    HierarchyNode,
    HierarchyNodeData,
    IssueMeta,
    IssueRelationships,
    TraversalResult,
)

PATH_SEPARATOR = "|"


def _validate_path(path: list[str], root_id: str) -> None:
    if len(path) < 2 or path[0] != root_id:
        raise MalformedPathError(
            f"Path {PATH_SEPARATOR.join(path)!r} does not start at root {root_id!r}"
        )


def _new_node(result: TraversalResult, prefix: list[str]) -> HierarchyNode:
    issue_key = prefix[-1]
    meta = result.meta.issues.get(issue_key)

    return HierarchyNode(
        id=PATH_SEPARATOR.join(prefix),
        name=meta.key if meta else issue_key,
        value=0.0,
        color=get_status_color(
            meta.status_category if meta else None, meta.status if meta else None
        ),
        data=HierarchyNodeData(
            issue_key=meta.key if meta else None,
            status_category=meta.status_category if meta else None,
            status=meta.status if meta else None,
            assignee=meta.assignee if meta else None,
            label=f"{meta.key} · {meta.type.value}" if meta else issue_key,
            path=list(prefix),
            type=meta.type if meta else None,
            depth=len(prefix) - 1,
        ),
    )


def propagate_values(node: HierarchyNode) -> float:
    """Set every internal node's value to the sum of its children's values."""
    if not node.children:
        return node.value

    node.value = sum(propagate_values(child) for child in node.children)
    return node.value


def scale_subtree(node: HierarchyNode, factor: float) -> None:
    node.value *= factor
    for child in node.children:
        scale_subtree(child, factor)


def equalize_first_ring(root: HierarchyNode) -> None:
    """Rescale each direct child of the root so its value is exactly 1.

    The whole subtree is scaled by the same factor, so proportions within a
    branch are kept. A branch with value 0 is set to 1 and its (empty)
    descendants are left for pruning.
    """
    if not root.children or root.value == 0:
        return

    for child in root.children:
        if child.value <= 0:
            child.value = 1.0
            continue

        scale_subtree(child, 1 / child.value)
        # Exact 1 regardless of float rounding
        child.value = 1.0


def update_root_value(root: HierarchyNode) -> None:
    if root.children:
        root.value = sum(child.value for child in root.children)


def prune_empty_nodes(node: HierarchyNode) -> None:
    """Recursively drop children whose value is 0."""
    node.children = [child for child in node.children if child.value > 0]
    for child in node.children:
        prune_empty_nodes(child)


def build_hierarchy(result: TraversalResult | None) -> HierarchyNode | None:
    """Build the weighted tree for a traversal result.

    Paths sharing a prefix share a tree node. Each path adds 1 to its own
    node; values are then summed bottom-up, every first-ring branch is
    equalised to 1, the root is recomputed and zero-valued nodes are pruned.

    Args:
        result: Traversal result, or None

    Returns:
        Root HierarchyNode (id and name are the PI), or None for no result

    Raises:
        MalformedPathError: If a path does not start at ``result.pi``
    """
    if result is None:
        return None

    root = HierarchyNode(
        id=result.pi,
        name=result.pi,
        value=0.0,
        color=ROOT_COLOR,
        data=HierarchyNodeData(path=[result.pi], depth=0),
    )

    index: dict[str, HierarchyNode] = {result.pi: root}

    # Shorter paths first so every parent exists before its children
    for path_node in sorted(result.nodes, key=lambda node: len(node.path)):
        path = path_node.path
        _validate_path(path, result.pi)

        parent = root
        for level in range(1, len(path)):
            prefix = path[: level + 1]
            key = PATH_SEPARATOR.join(prefix)
            current = index.get(key)

            if current is None:
                current = _new_node(result, prefix)
                parent.children.append(current)
                index[key] = current

            if level == len(path) - 1:
                current.value += 1

            parent = current

    propagate_values(root)
    equalize_first_ring(root)
    update_root_value(root)
    prune_empty_nodes(root)

    return root


def hierarchy_to_dict(node: HierarchyNode) -> dict[str, Any]:
    """Serialize a tree to the ``{id, name, value, color, children, data}`` JSON."""
    return node.to_json_dict()


def _keys_to_meta(result: TraversalResult, keys: list[str]) -> list[IssueMeta]:
    metas: list[IssueMeta] = []
    seen: set[str] = set()
    for key in keys:
        meta = result.meta.issues.get(key)
        if meta is not None and key not in seen:
            metas.append(meta)
            seen.add(key)
    return metas


def extract_relationships(
    result: TraversalResult | None, issue_key: str
) -> IssueRelationships:
    """Collect the direct parents and children of an issue across all paths.

    The root PI is never reported as a parent or child. Keys without metadata
    are skipped.
    """
    if result is None:
        return IssueRelationships()

    parents: dict[str, None] = {}
    children: dict[str, None] = {}

    for node in result.nodes:
        if issue_key not in node.path:
            continue
        index = node.path.index(issue_key)

        if index > 1:
            parent_key = node.path[index - 1]
            if parent_key != result.pi:
                parents.setdefault(parent_key, None)

        if index < len(node.path) - 1:
            child_key = node.path[index + 1]
            if child_key != result.pi:
                children.setdefault(child_key, None)

    return IssueRelationships(
        parents=_keys_to_meta(result, list(parents)),
        children=_keys_to_meta(result, list(children)),
    )
