"""Program Increment sunburst: Jira link traversal and radial hierarchy aggregation."""

__version__ = "0.1.0"
