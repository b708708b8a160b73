"""Jira REST API client using httpx."""

import logging
from collections.abc import Iterator, Sequence
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..config import JiraSettings
from ..errors import JiraError
from .models import JiraIssue, JiraSearchResponse, JiraVersion
from .search import build_key_query

logger = logging.getLogger(__name__)

T = TypeVar("T")

ISSUE_FIELDS = [
    "key",
    "summary",
    "issuetype",
    "status",
    "project",
    "fixVersions",
    "issuelinks",
    "customfield_12001",
    "statuscategory",
    "assignee",
]

SEARCH_PAGE_SIZE = 100
KEY_BATCH_SIZE = 50


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size <= 0:
        raise ValueError("size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class JiraClient:
    """Jira API client with bearer authentication and paginated search."""

    def __init__(
        self,
        settings: JiraSettings,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize Jira client.

        Args:
            settings: Jira connection settings
            transport: Optional httpx transport (used by tests)
        """
        self.settings = settings
        self._http = httpx.Client(
            base_url=settings.base_url,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Authorization": f"Bearer {settings.token}",
            },
            timeout=settings.request_timeout,
            verify=settings.reject_unauthorized,
            transport=transport,
        )

    def __enter__(self) -> "JiraClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue a GET request and return the decoded JSON body.

        Raises:
            JiraError: On auth failure, non-2xx status, timeout, transport
                error or a body that is not JSON
        """
        logger.debug("GET %s params=%s", path, params)
        try:
            response = self._http.get(path, params=params)
        except httpx.TimeoutException:
            raise JiraError("Jira timeout", 504)
        except httpx.HTTPError as e:
            raise JiraError(str(e), 500)

        if response.status_code in (401, 403):
            raise JiraError("Jira auth failed", response.status_code)

        if not response.is_success:
            raise JiraError(
                f"Jira request failed with {response.status_code}: {response.text}",
                response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise JiraError(f"Jira returned a non-JSON response for {path}", 502)

    def _search_page(
        self, jql: str, start_at: int, max_results: int
    ) -> JiraSearchResponse:
        data = self._get(
            "/rest/api/2/search",
            params={
                "jql": jql,
                "startAt": start_at,
                "maxResults": max_results,
                "fields": ",".join(ISSUE_FIELDS),
                "expand": "issuelinks",
                # Unknown keys in "key in (...)" become warnings instead of a 400
                "validateQuery": "warn",
            },
        )
        try:
            return JiraSearchResponse.model_validate(data)
        except ValidationError as e:
            raise JiraError(f"Malformed Jira search response: {e}", 502)

    def search_issues(self, jql: str) -> list[JiraIssue]:
        """Return every issue matching a JQL query, following pagination.

        Args:
            jql: JQL query string

        Returns:
            List of JiraIssue objects including their issue links
        """
        results: list[JiraIssue] = []
        start_at = 0

        while True:
            page = self._search_page(jql, start_at, SEARCH_PAGE_SIZE)
            results.extend(page.issues)

            # Guard against servers that report maxResults=0 for a non-empty page
            step = page.max_results or len(page.issues)
            if step <= 0:
                break
            start_at += step
            if start_at >= page.total:
                break

        logger.debug("JQL %r returned %d issues", jql, len(results))
        return results

    def count_issues(self, jql: str) -> int:
        """Return the number of issues matching a JQL query without fetching them."""
        data = self._get(
            "/rest/api/2/search",
            params={"jql": jql, "startAt": 0, "maxResults": 0, "fields": "key"},
        )
        if not isinstance(data, dict):
            raise JiraError("Malformed Jira search response", 502)
        return int(data.get("total") or 0)

    def fetch_issues_by_keys(self, keys: Sequence[str]) -> list[JiraIssue]:
        """Fetch issues by key in batches of at most 50 keys per query.

        Duplicate keys are requested once; unknown keys are simply absent from
        the result.

        Args:
            keys: Issue keys to fetch

        Returns:
            List of JiraIssue objects in batch order
        """
        unique_keys = list(dict.fromkeys(keys))
        output: list[JiraIssue] = []

        for batch in chunked(unique_keys, KEY_BATCH_SIZE):
            jql = build_key_query(batch)
            if jql is None:
                continue
            output.extend(self.search_issues(jql))

        return output

    def get_project_versions(self, project_key: str) -> list[JiraVersion]:
        """List all versions of a project."""
        path = f"/rest/api/2/project/{quote(project_key, safe='')}/versions"
        data = self._get(path)
        if not isinstance(data, list):
            raise JiraError("Malformed Jira versions response", 502)
        try:
            return [JiraVersion.model_validate(item) for item in data]
        except ValidationError as e:
            raise JiraError(f"Malformed Jira versions response: {e}", 502)
