"""Request-level wiring: config, store and whole-result caching around the core."""

import logging
import time
from collections.abc import Callable

from .cache import TTLCache
from .config import AppConfig
from .sunburst.hierarchy import build_hierarchy, extract_relationships
from .sunburst.models import HierarchyNode, IssueRelationships, TraversalResult
from .sunburst.traversal import IssueStore, build_traversal

logger = logging.getLogger(__name__)


class SunburstService:
    """Runs traversals for a PI and caches complete results by PI.

    The traversal itself holds no state between calls; only finished results
    are cached here.
    """

    def __init__(
        self,
        store: IssueStore,
        config: AppConfig,
        cache: TTLCache[TraversalResult] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.config = config
        if cache is None:
            cache = TTLCache(config.limits.result_cache_ttl, label="sunburst")
        self.cache = cache
        self._clock = clock

    def get_traversal(self, pi: str, *, refresh: bool = False) -> TraversalResult:
        """Return the traversal result for ``pi``.

        Args:
            pi: Program Increment name
            refresh: Bypass and replace any cached result

        Raises:
            ValueError: If ``pi`` is blank
            TraversalTimeoutError: If the traversal budget runs out
            JiraError: On store failures
        """
        pi = pi.strip()
        if not pi:
            raise ValueError("pi is required")

        if not refresh:
            cached = self.cache.get(pi)
            if cached is not None:
                logger.debug("Serving cached traversal for %s", pi)
                return cached

        result = build_traversal(
            self.store,
            pi,
            max_nodes=self.config.limits.max_nodes,
            traversal_timeout=self.config.jira.traversal_timeout,
            project=self.config.jira.goal_project,
            browse_base_url=self.config.jira.browse_base_url,
            clock=self._clock,
        )
        self.cache.set(pi, result)
        return result

    def get_hierarchy(self, pi: str, *, refresh: bool = False) -> HierarchyNode:
        root = build_hierarchy(self.get_traversal(pi, refresh=refresh))
        # build_hierarchy only returns None for a missing result
        assert root is not None
        return root

    def get_relationships(self, pi: str, issue_key: str) -> IssueRelationships:
        return extract_relationships(self.get_traversal(pi), issue_key)
