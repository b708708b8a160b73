"""Classification of raw Jira issues into canonical types and status categories."""

import logging

from ..jira_client.models import JiraIssue, JiraIssueLink
from .models import Issue, IssueType, Link, StatusCategory

logger = logging.getLogger(__name__)

# Ordered: the first substring found in the lower-cased type name wins
ISSUE_TYPE_TABLE: list[tuple[str, IssueType]] = [
    ("goal", IssueType.GOAL),
    ("impact", IssueType.IMPACT),
    ("feature", IssueType.FEATURE),
    ("story", IssueType.STORY),
    ("enabler", IssueType.ENABLER),
    ("spike", IssueType.SPIKE),
    ("objective", IssueType.OBJECTIVE),
    ("capability", IssueType.FEATURE),
    ("program backlog", IssueType.FEATURE),
    ("programme backlog", IssueType.FEATURE),
    ("pbi", IssueType.FEATURE),
    ("backlog item", IssueType.FEATURE),
]

STATUS_NAME_TO_CATEGORY: dict[str, StatusCategory] = {
    "to do": StatusCategory.TO_DO,
    "in progress": StatusCategory.IN_PROGRESS,
    "done": StatusCategory.DONE,
}


def normalize_issue_type(name: str | None) -> IssueType | None:
    """Map a Jira issue type name to a canonical IssueType, or None."""
    if not name:
        return None
    lower = name.lower()
    for needle, issue_type in ISSUE_TYPE_TABLE:
        if needle in lower:
            return issue_type
    return None


def normalize_status_category(name: str | None) -> StatusCategory | None:
    """Map a Jira status category name to a StatusCategory, or None."""
    if not name:
        return None
    return STATUS_NAME_TO_CATEGORY.get(name.lower())


def _convert_link(raw_link: JiraIssueLink) -> Link:
    return Link(
        label_outward=raw_link.type.outward,
        label_inward=raw_link.type.inward,
        outward_key=raw_link.outward_issue.key if raw_link.outward_issue else None,
        inward_key=raw_link.inward_issue.key if raw_link.inward_issue else None,
    )


def classify(raw: JiraIssue) -> Issue | None:
    """Convert a raw Jira issue into a classified Issue.

    Issues whose type or status category cannot be normalised are not an
    error: they are excluded from the hierarchy by returning None.

    Args:
        raw: Issue as returned by the store

    Returns:
        Classified Issue, or None when the issue cannot be classified
    """
    fields = raw.fields

    type_name = fields.issuetype.name if fields.issuetype else None
    issue_type = normalize_issue_type(type_name)
    if issue_type is None:
        logger.debug("Skipping %s: unrecognised issue type", raw.key)
        return None

    category_name = None
    if fields.status and fields.status.status_category:
        category_name = fields.status.status_category.name
    status_category = normalize_status_category(category_name)
    if status_category is None:
        logger.debug("Skipping %s: unrecognised status category", raw.key)
        return None

    extra_labels = [
        option.value.strip()
        for option in fields.telescope or []
        if option.value and option.value.strip()
    ]

    return Issue(
        key=raw.key,
        type=issue_type,
        summary=fields.summary,
        status=fields.status.name if fields.status else "",
        status_category=status_category,
        project=fields.project.key if fields.project else "",
        fix_versions=[version.name or "" for version in fields.fix_versions],
        assignee=fields.assignee.display_name if fields.assignee else None,
        extra_labels=extra_labels,
        links=[_convert_link(link) for link in fields.issuelinks],
    )


def classify_all(raw_issues: list[JiraIssue]) -> list[Issue]:
    """Classify a batch, dropping misses and keeping the first copy of each key."""
    classified: dict[str, Issue] = {}
    for raw in raw_issues:
        if raw.key in classified:
            continue
        issue = classify(raw)
        if issue is not None:
            classified[issue.key] = issue
    return list(classified.values())
