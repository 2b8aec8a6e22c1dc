"""Unit tests for status and info CLI commands."""

import json
from unittest.mock import MagicMock, patch

from cvsctl.cli.main import app
from cvsctl.cvs.errors import InvalidCvsRootError, ProcessFailure
from cvsctl.models.status import CvsInfo, FileStatus
from typer.testing import CliRunner

runner = CliRunner()


# =============================================================================
# status tests
# =============================================================================


class TestStatusCommand:
    """Tests for cvsctl status command."""

    @patch("cvsctl.cli.commands.status.get_client")
    def test_table_output(self, mock_get_client: MagicMock) -> None:
        """Statuses are shown per file with a summary line."""
        client = mock_get_client.return_value
        client.resolve_statuses.return_value = {
            "/w/a.c": FileStatus.UP_TO_DATE,
            "/w/b.c": FileStatus.MODIFIED,
        }

        result = runner.invoke(app, ["status", "/w/a.c", "/w/b.c"])

        assert result.exit_code == 0
        assert "a.c" in result.output
        assert "Up-to-date" in result.output
        assert "Modified" in result.output
        assert "2 files" in result.output
        client.resolve_statuses.assert_called_once_with(["/w/a.c", "/w/b.c"])

    @patch("cvsctl.cli.commands.status.get_client")
    def test_json_output(self, mock_get_client: MagicMock) -> None:
        """JSON output lists path and status value."""
        mock_get_client.return_value.resolve_statuses.return_value = {
            "/w/a.c": FileStatus.NOT_CVS_FILE,
        }

        result = runner.invoke(app, ["status", "--format", "json", "/w/a.c"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"path": "/w/a.c", "status": "not-cvs-file"}]

    @patch("cvsctl.cli.commands.status.get_client")
    def test_error_exit_code(self, mock_get_client: MagicMock) -> None:
        """A failed query makes the command exit non-zero."""
        mock_get_client.return_value.resolve_statuses.return_value = {
            "/w/a.c": FileStatus.UP_TO_DATE,
            "/w/b.c": FileStatus.ERROR,
        }

        result = runner.invoke(app, ["status", "/w/a.c", "/w/b.c"])

        assert result.exit_code == 1

    @patch("cvsctl.cli.commands.status.get_client")
    def test_not_found_is_not_an_error(self, mock_get_client: MagicMock) -> None:
        """Missing files are reported but do not fail the command."""
        mock_get_client.return_value.resolve_statuses.return_value = {
            "/w/gone.c": FileStatus.NOT_FOUND,
        }

        result = runner.invoke(app, ["status", "/w/gone.c"])

        assert result.exit_code == 0
        assert "Not found" in result.output

    def test_requires_paths(self) -> None:
        """At least one path is required."""
        result = runner.invoke(app, ["status"])

        assert result.exit_code != 0


# =============================================================================
# info tests
# =============================================================================


class TestInfoCommand:
    """Tests for cvsctl info command."""

    @patch("cvsctl.cli.commands.info.get_client")
    def test_text_output(self, mock_get_client: MagicMock) -> None:
        """Revision and tags are printed."""
        mock_get_client.return_value.describe.return_value = (
            CvsInfo(filename="main.c", revision="1.4", tags=("REL-1_2", "NIGHTLY")),
            ["REL-1_2"],
        )

        result = runner.invoke(app, ["info", "/w/main.c"])

        assert result.exit_code == 0
        assert "main.c" in result.output
        assert "1.4" in result.output
        assert "REL-1_2, NIGHTLY" in result.output

    @patch("cvsctl.cli.commands.info.get_client")
    def test_json_output(self, mock_get_client: MagicMock) -> None:
        """JSON output includes head tags."""
        mock_get_client.return_value.describe.return_value = (
            CvsInfo(filename="main.c", revision="1.4", tags=("REL-1_2",)),
            ["REL-1_2"],
        )

        result = runner.invoke(app, ["info", "-f", "json", "/w/main.c"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "filename": "main.c",
            "revision": "1.4",
            "tags": ["REL-1_2"],
            "head_tags": ["REL-1_2"],
        }

    @patch("cvsctl.cli.commands.info.get_client")
    def test_not_cvs_working_copy(self, mock_get_client: MagicMock) -> None:
        """Files outside a working copy are reported."""
        mock_get_client.return_value.describe.side_effect = InvalidCvsRootError(
            "No CVSROOT specified"
        )

        result = runner.invoke(app, ["info", "/tmp/a.c"])

        assert result.exit_code == 1
        assert "Not a CVS working copy" in result.output

    @patch("cvsctl.cli.commands.info.get_client")
    def test_process_failure(self, mock_get_client: MagicMock) -> None:
        """cvs errors are shown with their message."""
        mock_get_client.return_value.describe.side_effect = ProcessFailure("lock failed")

        result = runner.invoke(app, ["info", "/w/a.c"])

        assert result.exit_code == 1
        assert "lock failed" in result.output
