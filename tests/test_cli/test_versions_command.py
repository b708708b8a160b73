"""Tests for the versions CLI command."""

import os
from unittest.mock import MagicMock, Mock, patch

from typer.testing import CliRunner

from pi_sunburst.cli.main import app
from pi_sunburst.errors import JiraError
from pi_sunburst.jira_client.models import JiraVersion

JIRA_ENV = {"JIRA_BASE_URL": "https://jira.example.com", "JIRA_TOKEN": "test_token"}


def _mock_client(versions: list[dict], goal_count: int = 1) -> MagicMock:
    client = MagicMock()
    client.__enter__.return_value = client
    client.__exit__.return_value = False
    client.get_project_versions.return_value = [
        JiraVersion.model_validate(version) for version in versions
    ]
    client.count_issues.return_value = goal_count
    return client


@patch.dict(os.environ, JIRA_ENV)
class TestVersionsCommand:
    """Test the versions CLI command."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.runner = CliRunner()

    @patch("pi_sunburst.cli.versions.create_client")
    def test_lists_versions(self, mock_create_client: Mock) -> None:
        client = _mock_client(
            [
                {"id": "1", "name": "PI29", "released": True},
                {"id": "2", "name": "PI30", "released": False},
                {"id": "3", "name": "Release 2"},
            ]
        )
        mock_create_client.return_value = client

        result = self.runner.invoke(app, ["versions", "--project", "sp"])

        assert result.exit_code == 0
        assert "PI30" in result.output
        assert "PI29" in result.output
        assert "Release 2" not in result.output
        assert "★" in result.output
        client.get_project_versions.assert_called_once_with("sp")

    @patch("pi_sunburst.cli.versions.create_client")
    def test_no_versions(self, mock_create_client: Mock) -> None:
        mock_create_client.return_value = _mock_client(
            [{"id": "1", "name": "PI30"}], goal_count=0
        )

        result = self.runner.invoke(app, ["versions", "--project", "SP"])

        assert result.exit_code == 0
        assert "No PI versions with goals found for SP" in result.output

    @patch("pi_sunburst.cli.versions.create_client")
    def test_jira_error(self, mock_create_client: Mock) -> None:
        client = _mock_client([])
        client.get_project_versions.side_effect = JiraError("Jira auth failed", 403)
        mock_create_client.return_value = client

        result = self.runner.invoke(app, ["versions", "--project", "SP"])

        assert result.exit_code == 2
        assert "Jira auth failed" in result.output

    def test_blank_project(self) -> None:
        with patch("pi_sunburst.cli.versions.create_client") as mock_create_client:
            mock_create_client.return_value = _mock_client([])
            result = self.runner.invoke(app, ["versions", "--project", " "])

        assert result.exit_code == 1
        assert "project is required" in result.output
