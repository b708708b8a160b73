"""Tests for environment configuration."""

import pytest

from pi_sunburst.config import load_config, parse_bool

BASE_ENV = {
    "JIRA_BASE_URL": "https://jira.example.com/",
    "JIRA_TOKEN": "secret",
}


class TestParseBool:
    """Test boolean environment parsing."""

    @pytest.mark.parametrize(
        "value,expected", [("true", True), ("1", True), ("false", False), ("0", False)]
    )
    def test_recognised(self, value: str, expected: bool) -> None:
        assert parse_bool(value, not expected) is expected

    @pytest.mark.parametrize("value", [None, "", "yes", "TRUE", "off"])
    def test_fallback(self, value: str | None) -> None:
        assert parse_bool(value, True) is True
        assert parse_bool(value, False) is False


class TestLoadConfig:
    """Test building AppConfig from environment mappings."""

    def test_defaults(self) -> None:
        config = load_config(BASE_ENV)

        assert config.jira.base_url == "https://jira.example.com"
        assert config.jira.browse_base_url == "https://jira.example.com/browse"
        assert config.jira.token == "secret"
        assert config.jira.reject_unauthorized is True
        assert config.jira.request_timeout == 10.0
        assert config.jira.traversal_timeout == 30.0
        assert config.jira.goal_project == "TPO"
        assert config.limits.max_nodes == 1500
        assert config.limits.version_cache_ttl == 300.0
        assert config.limits.result_cache_ttl == 60.0

    def test_overrides(self) -> None:
        env = {
            **BASE_ENV,
            "JIRA_REJECT_UNAUTHORIZED": "false",
            "JIRA_REQUEST_TIMEOUT_MS": "2500",
            "JIRA_TRAVERSAL_TIMEOUT_MS": "45000",
            "JIRA_GOAL_PROJECT": "ABC",
            "SUNBURST_MAX_NODES": "200",
            "VERSION_CACHE_TTL_MS": "1000",
            "RESULT_CACHE_TTL_MS": "500",
        }

        config = load_config(env)

        assert config.jira.reject_unauthorized is False
        assert config.jira.request_timeout == 2.5
        assert config.jira.traversal_timeout == 45.0
        assert config.jira.goal_project == "ABC"
        assert config.limits.max_nodes == 200
        assert config.limits.version_cache_ttl == 1.0
        assert config.limits.result_cache_ttl == 0.5

    def test_blank_values_use_defaults(self) -> None:
        config = load_config({**BASE_ENV, "JIRA_REQUEST_TIMEOUT_MS": " "})

        assert config.jira.request_timeout == 10.0

    @pytest.mark.parametrize("missing", ["JIRA_BASE_URL", "JIRA_TOKEN"])
    def test_missing_required(self, missing: str) -> None:
        env = {key: value for key, value in BASE_ENV.items() if key != missing}

        with pytest.raises(ValueError, match=missing):
            load_config(env)

    def test_missing_both(self) -> None:
        with pytest.raises(
            ValueError,
            match="Environment variables required for Jira access: "
            "JIRA_BASE_URL, JIRA_TOKEN",
        ):
            load_config({})

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError, match="Expected a number of milliseconds"):
            load_config({**BASE_ENV, "JIRA_TRAVERSAL_TIMEOUT_MS": "soon"})

    def test_non_positive_limits_rejected(self) -> None:
        with pytest.raises(ValueError):
            load_config({**BASE_ENV, "SUNBURST_MAX_NODES": "0"})

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JIRA_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("JIRA_TOKEN", "from-env")

        config = load_config()

        assert config.jira.base_url == "https://env.example.com"
        assert config.jira.token == "from-env"
