"""Jira client package for API interaction."""

from .client import JiraClient
from .models import JiraIssue, JiraIssueLink, JiraVersion
from .search import build_goal_query, escape_jql_value
from .versions import VersionCatalog, list_pi_versions

__all__ = [
    "JiraClient",
    "JiraIssue",
    "JiraIssueLink",
    "JiraVersion",
    "VersionCatalog",
    "build_goal_query",
    "escape_jql_value",
    "list_pi_versions",
]
