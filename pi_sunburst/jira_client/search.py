"""JQL query building."""

import re
from collections.abc import Sequence


def escape_jql_value(value: str) -> str:
    """Escape quotes and backslashes for use inside a double-quoted JQL string."""
    return re.sub(r'(["\\])', r"\\\1", value)


def sanitize_issue_key(key: str) -> str:
    """Strip everything but letters, digits, '_' and '-' from an issue key.

    Keys are interpolated into JQL unquoted, so this keeps them from
    changing the query.
    """
    return re.sub(r"[^A-Za-z0-9_\-]", "", key)


def build_goal_query(pi: str, project: str = "TPO") -> str:
    """Build the JQL selecting the Goals of a PI.

    Args:
        pi: Fix version name of the Program Increment
        project: Project holding the Goals

    Returns:
        JQL query string

    Example:
        >>> build_goal_query("PI30")
        'project = TPO AND issuetype = Goal AND fixVersion = "PI30"'
    """
    return (
        f"project = {escape_jql_value(project)} AND issuetype = Goal "
        f'AND fixVersion = "{escape_jql_value(pi)}"'
    )


def build_key_query(keys: Sequence[str]) -> str | None:
    """Build a ``key in (...)`` query, or None when no usable key remains."""
    sanitized = [key for key in map(sanitize_issue_key, keys) if key]
    if not sanitized:
        return None
    return f"key in ({','.join(sanitized)})"
