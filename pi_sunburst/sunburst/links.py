"""Issue link label matching and hop resolution.

Link types in the source Jira instances carry many near-synonymous labels
("is realised by backlog", "Realised by (delivery)", "realized by", ...).
Labels are compared after normalisation, and a match is accepted when one
normalised label contains the other.
"""

import re
from enum import Enum
from typing import NamedTuple

from .models import Issue, Link

_SPELLING_FOLDS = (
    ("realized", "realised"),
    ("achieves", "achieve"),
    ("helps to", "helps"),
)


def normalize_link_label(value: str) -> str:
    """Normalise a link label for comparison.

    Lower-cases, trims, drops a leading "is ", folds known spelling variants
    and collapses whitespace.

    Example:
        >>> normalize_link_label("  Is Realized   by ")
        'realised by'
    """
    normalized = value.strip().lower()

    if normalized.startswith("is "):
        normalized = normalized[3:]

    for variant, canonical in _SPELLING_FOLDS:
        normalized = normalized.replace(variant, canonical)

    return re.sub(r"\s+", " ", normalized).strip()


def labels_match(actual: str | None, expected: str) -> bool:
    """Check whether an actual link label matches an expected hop label.

    Matches on normalised equality or substring containment in either
    direction. A missing or blank actual label never matches.
    """
    if not actual:
        return False

    normalized_actual = normalize_link_label(actual)
    normalized_expected = normalize_link_label(expected)

    if not normalized_actual:
        return False

    return (
        normalized_actual == normalized_expected
        or normalized_expected in normalized_actual
        or normalized_actual in normalized_expected
    )


class HopLabels(NamedTuple):
    """Expected labels on each side of a link for one hop."""

    outward: str
    inward: str


class HopKind(Enum):
    """The fixed parent-to-child relationships of the hierarchy.

    ``ROOT_MEMBERSHIP`` (PI to Goal) is resolved by fix-version query, not by
    links, so it carries no labels.
    """

    ROOT_MEMBERSHIP = None
    ACHIEVED_THROUGH = HopLabels(outward="is achieved through", inward="helps achieve")
    REALISED_BY = HopLabels(outward="realised by", inward="realises")
    RELATES_TO = HopLabels(outward="relates to", inward="relates to")

    @property
    def labels(self) -> HopLabels:
        if self.value is None:
            raise ValueError(f"{self.name} is not resolved through issue links")
        return self.value

    @property
    def normalized_labels(self) -> HopLabels:
        return _NORMALIZED_HOP_LABELS[self]


_NORMALIZED_HOP_LABELS = {
    hop: HopLabels(
        outward=normalize_link_label(hop.value.outward),
        inward=normalize_link_label(hop.value.inward),
    )
    for hop in HopKind
    if hop.value is not None
}


def resolve_linked_key(link: Link, current_key: str, hop: HopKind) -> str | None:
    """Return the key on the other end of ``link`` if it follows ``hop``.

    The outward endpoint is taken when the outward label matches the hop's
    outward label; otherwise the inward endpoint when the inward label
    matches. Links back to ``current_key`` are discarded.

    Args:
        link: Link carried by the current issue
        current_key: Key of the issue carrying the link
        hop: Hop to follow

    Returns:
        Linked issue key, or None when the link does not follow the hop
    """
    expected = hop.normalized_labels

    if (
        link.outward_key
        and link.outward_key != current_key
        and labels_match(link.label_outward, expected.outward)
    ):
        return link.outward_key

    if (
        link.inward_key
        and link.inward_key != current_key
        and labels_match(link.label_inward, expected.inward)
    ):
        return link.inward_key

    return None


def collect_linked_keys(issue: Issue, hop: HopKind) -> list[str]:
    """Resolve every link of ``issue`` along ``hop``.

    Returns:
        Linked keys in link order, without duplicates
    """
    keys: dict[str, None] = {}
    for link in issue.links:
        candidate = resolve_linked_key(link, issue.key, hop)
        if candidate is not None:
            keys.setdefault(candidate, None)
    return list(keys)
