"""Unit tests for the high-level cvs client."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from cvsctl.core.config import CvsConfig
from cvsctl.cvs.client import CvsClient
from cvsctl.cvs.commands import CommandInvocation
from cvsctl.cvs.errors import InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.cvs.executor import CommandExecutor
from cvsctl.models.status import FileStatus


def _make_client(stdout: str = "", **kwargs: object) -> tuple[CvsClient, MagicMock]:
    """Create a client whose executor returns fixed stdout."""
    executor = MagicMock(spec=CommandExecutor)
    executor.execute.return_value = stdout
    return CvsClient(executor, **kwargs), executor  # type: ignore[arg-type]


def _invocation(executor: MagicMock, index: int = 0) -> CommandInvocation:
    """Return the invocation passed to the nth execute() call."""
    return executor.execute.call_args_list[index].args[0]


class TestFromConfig:
    """Tests for CvsClient.from_config."""

    def test_applies_settings(self) -> None:
        """Executable, encoding, timeout, and CVSROOT come from config."""
        config = CvsConfig(
            executable="cvsnt",
            encoding="cp1252",
            timeout_seconds=30,
            cvsroot=":pserver:anon@cvs.example.org:/cvsroot",
            max_workers=2,
        )

        client = CvsClient.from_config(config)

        assert client.executable == "cvsnt"
        assert client._executor.encoding == "cp1252"
        assert client._executor.timeout == 30
        assert client._executor._env == {"CVSROOT": ":pserver:anon@cvs.example.org:/cvsroot"}


class TestQueries:
    """Tests for status and info queries."""

    def test_get_status(self, status_modified_output: str) -> None:
        """Status runs in the file's directory and parses the result."""
        client, executor = _make_client(status_modified_output)

        assert client.get_status("/work/src/util.c") == FileStatus.MODIFIED
        invocation = _invocation(executor)
        assert invocation.args == ("cvs", "status", "-v", "util.c")
        assert invocation.cwd == "/work/src/"

    def test_custom_executable(self, status_modified_output: str) -> None:
        """The configured binary is used for every command."""
        client, executor = _make_client(status_modified_output, executable="cvsnt")

        client.get_status("/work/util.c")

        assert _invocation(executor).executable == "cvsnt"

    def test_no_cvsroot_is_classified(self, no_cvsroot_error: str) -> None:
        """A missing CVSROOT raises InvalidCvsRootError chained to the original."""
        client, executor = _make_client()
        failure = ProcessFailure(no_cvsroot_error.strip(), returncode=1)
        executor.execute.side_effect = failure

        with pytest.raises(InvalidCvsRootError) as exc_info:
            client.get_status("/tmp/a.c")

        assert exc_info.value.__cause__ is failure
        assert exc_info.value.returncode == 1

    def test_other_failures_propagate(self) -> None:
        """Unrecognised failures are re-raised unchanged."""
        client, executor = _make_client()
        failure = ProcessFailure("cvs [status aborted]: lock failed", returncode=1)
        executor.execute.side_effect = failure

        with pytest.raises(ProcessFailure) as exc_info:
            client.get_status("/work/a.c")

        assert exc_info.value is failure

    def test_malformed_path_runs_nothing(self) -> None:
        """A path without a filename never reaches the executor."""
        client, executor = _make_client()

        with pytest.raises(MalformedPathError):
            client.get_status("/work/src/")

        executor.execute.assert_not_called()

    def test_get_info(self, status_up_to_date_output: str) -> None:
        """Info is parsed from status output."""
        client, _ = _make_client(status_up_to_date_output)

        info = client.get_info("/work/src/main.c")

        assert info.filename == "main.c"
        assert info.revision == "1.4"

    def test_get_latest_tags(self, status_up_to_date_output: str) -> None:
        """Head tags are parsed from status output."""
        client, _ = _make_client(status_up_to_date_output)

        assert client.get_latest_tags("/work/src/main.c") == ["REL-1_2", "NIGHTLY"]

    def test_describe_runs_once(self, status_up_to_date_output: str) -> None:
        """describe() reads info and head tags from a single invocation."""
        client, executor = _make_client(status_up_to_date_output)

        info, head_tags = client.describe("/work/src/main.c")

        assert info.tags == ("REL-1_2", "NIGHTLY", "REL-1_1", "maint-1")
        assert head_tags == ["REL-1_2", "NIGHTLY"]
        assert executor.execute.call_count == 1


class TestResolveStatus:
    """Tests for the never-raising status resolution."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Files absent on disk are NOT_FOUND without running cvs."""
        client, executor = _make_client()

        assert client.resolve_status(str(tmp_path / "gone.c")) == FileStatus.NOT_FOUND
        executor.execute.assert_not_called()

    def test_success(self, working_file: Path, status_up_to_date_output: str) -> None:
        """A successful query yields the parsed status."""
        client, _ = _make_client(status_up_to_date_output)

        assert client.resolve_status(str(working_file)) == FileStatus.UP_TO_DATE

    def test_not_cvs_file(self, working_file: Path, no_cvsroot_error: str) -> None:
        """Directories without CVS metadata give NOT_CVS_FILE."""
        client, executor = _make_client()
        executor.execute.side_effect = ProcessFailure(no_cvsroot_error.strip(), returncode=1)

        assert client.resolve_status(str(working_file)) == FileStatus.NOT_CVS_FILE

    def test_failure(self, working_file: Path) -> None:
        """Any other failure gives ERROR."""
        client, executor = _make_client()
        executor.execute.side_effect = ProcessFailure("Failed to run cvs: not found")

        assert client.resolve_status(str(working_file)) == FileStatus.ERROR

    def test_malformed_path(self, tmp_path: Path) -> None:
        """An existing path with no filename gives ERROR."""
        client, executor = _make_client()

        assert client.resolve_status(f"{tmp_path}/") == FileStatus.ERROR
        executor.execute.assert_not_called()

    def test_option_like_filename(self, tmp_path: Path) -> None:
        """An existing file whose name starts with '-' gives ERROR without running cvs."""
        (tmp_path / "-d").write_text("", encoding="utf-8")
        client, executor = _make_client()

        assert client.resolve_status(str(tmp_path / "-d")) == FileStatus.ERROR
        executor.execute.assert_not_called()

    def test_resolve_statuses(
        self,
        tmp_path: Path,
        status_up_to_date_output: str,
        status_modified_output: str,
    ) -> None:
        """Many files resolve concurrently, deduplicated, in input order."""
        (tmp_path / "main.c").write_text("", encoding="utf-8")
        (tmp_path / "util.c").write_text("", encoding="utf-8")
        main, util, gone = (str(tmp_path / n) for n in ("main.c", "util.c", "gone.c"))

        def execute(invocation: CommandInvocation) -> str:
            if invocation.args[-1] == "main.c":
                return status_up_to_date_output
            return status_modified_output

        client, executor = _make_client(max_workers=2)
        executor.execute.side_effect = execute

        statuses = client.resolve_statuses([util, main, gone, util])

        assert list(statuses) == [util, main, gone]
        assert statuses[main] == FileStatus.UP_TO_DATE
        assert statuses[util] == FileStatus.MODIFIED
        assert statuses[gone] == FileStatus.NOT_FOUND
        assert executor.execute.call_count == 2

    def test_resolve_statuses_empty(self) -> None:
        """No paths resolve to an empty mapping."""
        client, _ = _make_client()

        assert client.resolve_statuses([]) == {}


class TestOperations:
    """Tests for add, update, commit, tag, and history."""

    def test_add(self) -> None:
        """Add reports whether cvs scheduled the file."""
        client, executor = _make_client("scheduling file `new.c' for addition\n")

        assert client.add("/work/new.c") is True
        assert _invocation(executor).args == ("cvs", "add", "new.c")

    def test_update_no_change(self) -> None:
        """An up-to-date file produces no output and no change."""
        client, _ = _make_client("")

        assert client.update("/work/main.c") is False

    def test_update_applied(self) -> None:
        """A fetched revision counts as applied."""
        client, _ = _make_client("U main.c\n")

        assert client.update("/work/main.c") is True

    def test_commit(self) -> None:
        """The message is passed to cvs as one argument."""
        client, executor = _make_client("Checking in main.c;\nnew revision: 1.5\n")

        assert client.commit("/work/main.c", "Fix 'quoted' bug") is True
        assert _invocation(executor).args == (
            "cvs",
            "commit",
            "-m",
            "Fix 'quoted' bug",
            "main.c",
        )

    def test_tag(self) -> None:
        """Tag runs once for all files in the directory."""
        client, executor = _make_client("T a.c\nT b.c\n")

        assert client.tag(["a.c", "b.c"], "/work/", "REL-1") is True
        invocation = _invocation(executor)
        assert invocation.args == ("cvs", "tag", "-F", "REL-1", "a.c", "b.c")
        assert invocation.cwd == "/work/"

    def test_tag_rejects_option_like_tag(self) -> None:
        """A tag that cvs would parse as an option never reaches cvs."""
        client, executor = _make_client("T a.c\n")

        with pytest.raises(MalformedPathError, match="Invalid tag name"):
            client.tag(["a.c"], "/work/", "-d")

        executor.execute.assert_not_called()

    def test_history_strips_output(self) -> None:
        """The history report is returned without surrounding whitespace."""
        client, executor = _make_client("\nM 2024-01-07 10:21 +0000 alice 1.4 main.c src\n\n")

        report = client.history(["main.c"], "/work/src/")

        assert report == "M 2024-01-07 10:21 +0000 alice 1.4 main.c src"
        assert _invocation(executor).args == ("cvs", "history", "-alc", "main.c")

    def test_tag_paths_groups_by_directory(self) -> None:
        """One tag invocation runs per directory."""
        client, executor = _make_client("T a.c\n")

        result = client.tag_paths(["/w/a.c", "/x/b.c", "/w/c.c"], "REL-1")

        assert result == {"/w/": True, "/x/": True}
        assert executor.execute.call_count == 2
        assert _invocation(executor, 0).args == ("cvs", "tag", "-F", "REL-1", "a.c", "c.c")
        assert _invocation(executor, 1).args == ("cvs", "tag", "-F", "REL-1", "b.c")

    def test_tag_paths_rejects_malformed_batch(self) -> None:
        """A malformed path aborts the batch before anything runs."""
        client, executor = _make_client("T a.c\n")

        with pytest.raises(MalformedPathError):
            client.tag_paths(["/w/a.c", "/w/"], "REL-1")

        executor.execute.assert_not_called()

    def test_history_paths(self) -> None:
        """History reports are keyed by directory."""
        client, executor = _make_client("O 2024-01-07 10:21 +0000 bob main.c src =src= <remote>/*")

        result = client.history_paths(["/w/main.c", "/x/util.c"])

        assert list(result) == ["/w/", "/x/"]
        assert executor.execute.call_count == 2
