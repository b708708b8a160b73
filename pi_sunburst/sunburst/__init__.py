"""Traversal engine and hierarchy aggregation for the PI sunburst."""

from .classifier import classify
from .hierarchy import build_hierarchy, extract_relationships, hierarchy_to_dict
from .links import HopKind, labels_match, resolve_linked_key
from .models import (
    HierarchyNode,
    Issue,
    IssueMeta,
    IssueType,
    Link,
    PathNode,
    StatusCategory,
    TraversalResult,
)
from .traversal import IssueStore, build_traversal

__all__ = [
    "HierarchyNode",
    "HopKind",
    "Issue",
    "IssueMeta",
    "IssueStore",
    "IssueType",
    "Link",
    "PathNode",
    "StatusCategory",
    "TraversalResult",
    "build_hierarchy",
    "build_traversal",
    "classify",
    "extract_relationships",
    "hierarchy_to_dict",
    "labels_match",
    "resolve_linked_key",
]
