"""Error types raised by the Jira client, traversal engine and aggregator."""


class JiraError(Exception):
    """Failure talking to Jira (auth, transport, timeout or malformed response).

    The ``status`` mirrors the HTTP status the failure maps to, so callers can
    tell a gateway timeout (504) from other upstream failures.
    """

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.message = message
        self.status = status

    @property
    def is_timeout(self) -> bool:
        return self.status == 504


class TraversalTimeoutError(JiraError):
    """The wall-clock traversal budget ran out before a planned Jira call."""

    def __init__(self, message: str = "Jira traversal timeout"):
        super().__init__(message, status=504)


class MalformedPathError(ValueError):
    """A path node does not belong to the traversal root it was aggregated under."""
