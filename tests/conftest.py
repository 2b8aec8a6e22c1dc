"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, mostly
sample cvs client output.
"""

from pathlib import Path

import pytest


@pytest.fixture
def status_up_to_date_output() -> str:
    """Sample `cvs status -v` output for an up-to-date file with tags."""
    return """===================================================================
File: main.c           \tStatus: Up-to-date

   Working revision:\t1.4\tSun Jan  7 10:21:03 2024
   Repository revision:\t1.4\t/cvsroot/project/src/main.c,v
   Commit Identifier:\tq6DsGXfTdXLxK3uw
   Sticky Tag:\t\t(none)
   Sticky Date:\t\t(none)
   Sticky Options:\t(none)

   Existing Tags:
\tREL-1_2                 \t(revision: 1.4)
\tNIGHTLY                 \t(revision: 1.4)
\tREL-1_1                 \t(revision: 1.3)
\tmaint-1                 \t(branch: 1.3.2)

"""


@pytest.fixture
def status_modified_output() -> str:
    """Sample `cvs status -v` output for a locally modified file without tags."""
    return """===================================================================
File: util.c           \tStatus: Locally Modified

   Working revision:\t1.2\tMon Jan  8 09:00:00 2024
   Repository revision:\t1.2\t/cvsroot/project/src/util.c,v
   Sticky Tag:\t\t(none)
   Sticky Date:\t\t(none)
   Sticky Options:\t(none)

   Existing Tags:
\tNo Tags Exist

"""


@pytest.fixture
def status_added_output() -> str:
    """Sample `cvs status -v` output for a newly added file."""
    return """===================================================================
File: new_module.c     \tStatus: Locally Added

   Working revision:\tNew file!
   Repository revision:\tNo revision control file
   Sticky Tag:\t\t(none)
   Sticky Date:\t\t(none)
   Sticky Options:\t(none)

"""


@pytest.fixture
def no_cvsroot_error() -> str:
    """Sample stderr of cvs run outside a working copy."""
    return "cvs status: No CVSROOT specified!  Please use the `-d' option\n"


@pytest.fixture
def working_file(tmp_path: Path) -> Path:
    """Create an existing file inside a temporary working directory."""
    path = tmp_path / "main.c"
    path.write_text("int main(void) { return 0; }\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG config and state dirs at temporary directories."""
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(base / "state"))
    monkeypatch.delenv("CVSCTL_ENCODING", raising=False)
    monkeypatch.delenv("CVSCTL_EXECUTABLE", raising=False)
