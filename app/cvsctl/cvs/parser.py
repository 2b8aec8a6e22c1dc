"""Parsing of cvs client output.

CVS prints free-text, locale-sensitive reports rather than a
machine-readable format. Every function here is total: unexpected or
missing output yields a conservative default (UNKNOWN, empty field,
False) instead of an exception. All marker strings live in the tables
below so client version drift is handled in one place.
"""

import logging
import re
from enum import Enum

from cvsctl.cvs.errors import CvsError, InvalidCvsRootError, ProcessFailure
from cvsctl.models.status import CvsInfo, FileStatus

logger = logging.getLogger(__name__)

# Present in every per-file block of `cvs status`
FILE_MARKER = "File:"

# Checked in order; CVS prints a single Status: line per file block
STATUS_MARKERS: tuple[tuple[str, FileStatus], ...] = (
    ("Status: Up-to-date", FileStatus.UP_TO_DATE),
    ("Status: Locally Modified", FileStatus.MODIFIED),
    ("Status: Locally Added", FileStatus.ADDED),
    ("Status: Removed", FileStatus.REMOVED),
    ("Status: Unresolved Conflict", FileStatus.CONFLICT),
)

NO_CVSROOT_MARKER = "No CVSROOT specified"

WORKING_REVISION_MARKER = "Working revision:"
REPOSITORY_REVISION_MARKER = "Repository revision"
EXISTING_TAGS_MARKER = "Existing Tags:"

_REVISION_PATTERN = re.compile(r"\d+(?:\.\d+)+")
_STATUS_COLUMN_PATTERN = re.compile(r"\s*Status:.*$")


class Operation(str, Enum):
    """Mutating cvs operations whose outcome is read from stdout."""

    ADD = "add"
    UPDATE = "update"
    COMMIT = "commit"
    TAG = "tag"


# stdout must start with the prefix for the change to count as applied
OUTCOME_PREFIXES: dict[Operation, str] = {
    Operation.ADD: "scheduling file",
    Operation.UPDATE: "U",
    Operation.COMMIT: "Checking in",
    Operation.TAG: "T",
}


def parse_status(text: str) -> FileStatus:
    """Map `cvs status` output to a FileStatus.

    Args:
        text: Decoded stdout of `cvs status -v <file>`.

    Returns:
        The status of the first matching marker, or UNKNOWN when the
        output is not a per-file status block or carries no known marker.
    """
    if FILE_MARKER not in text:
        logger.debug("No %r marker in status output", FILE_MARKER)
        return FileStatus.UNKNOWN

    for marker, status in STATUS_MARKERS:
        if marker in text:
            return status

    logger.debug("Unrecognised status line in output: %r", text[:200])
    return FileStatus.UNKNOWN


def classify_failure(error: ProcessFailure) -> CvsError:
    """Re-classify a process failure into a more specific error.

    Args:
        error: Failure raised by the executor.

    Returns:
        InvalidCvsRootError if the message reports a missing CVSROOT,
        otherwise the original error unchanged.
    """
    if isinstance(error, InvalidCvsRootError):
        return error
    if NO_CVSROOT_MARKER in error.message:
        return InvalidCvsRootError(
            error.message,
            returncode=error.returncode,
            command=error.command,
        )
    return error


def parse_outcome(operation: Operation, text: str) -> bool:
    """Check whether a mutating operation applied a change.

    A False result means "no change", which includes the empty output of
    an update on an up-to-date file. It does not mean the command failed.

    Args:
        operation: Operation that produced the output.
        text: Decoded stdout of the operation.

    Returns:
        True if stdout starts with the operation's success prefix.
    """
    return text.startswith(OUTCOME_PREFIXES[operation])


def parse_add(text: str) -> bool:
    """Check `cvs add` output."""
    return parse_outcome(Operation.ADD, text)


def parse_update(text: str) -> bool:
    """Check `cvs update` output."""
    return parse_outcome(Operation.UPDATE, text)


def parse_commit(text: str) -> bool:
    """Check `cvs commit` output."""
    return parse_outcome(Operation.COMMIT, text)


def parse_tag(text: str) -> bool:
    """Check `cvs tag` output."""
    return parse_outcome(Operation.TAG, text)


def _after_colon(line: str) -> str:
    return line.split(":", 1)[1].strip() if ":" in line else ""


def _tag_block(lines: list[str], header_index: int) -> list[list[str]]:
    """Collect the indented tag table below an Existing Tags: header.

    Returns the whitespace-split fields of each `<tag> (<kind>: <rev>)`
    row. Rows of another shape, such as "No Tags Exist", are skipped. The
    block ends at the first non-indented, non-blank line.
    """
    rows: list[list[str]] = []
    for line in lines[header_index + 1 :]:
        if not line.strip():
            continue
        if not line[0].isspace():
            break
        fields = line.split()
        if len(fields) >= 3 and fields[1].startswith("("):
            rows.append(fields)
    return rows


def _find_line(lines: list[str], marker: str) -> int | None:
    for index, line in enumerate(lines):
        if marker in line:
            return index
    return None


def parse_info(text: str) -> CvsInfo:
    """Extract filename, working revision, and tags from `cvs status -v`.

    Each field is read independently. A missing marker leaves that field
    empty instead of failing the whole parse.

    Args:
        text: Decoded stdout of `cvs status -v <file>`.

    Returns:
        CvsInfo with whatever fields could be found.

    Example:
        >>> parse_info("File: foo.txt\\nWorking revision: 1.4\\nExisting Tags: REL-1 REL-2\\n")
        CvsInfo(filename='foo.txt', revision='1.4', tags=('REL-1', 'REL-2'))
    """
    lines = text.splitlines()

    filename = ""
    index = _find_line(lines, FILE_MARKER)
    if index is not None:
        filename = _STATUS_COLUMN_PATTERN.sub("", _after_colon(lines[index])).strip()

    revision = ""
    index = _find_line(lines, WORKING_REVISION_MARKER)
    if index is not None:
        remainder = _after_colon(lines[index])
        match = _REVISION_PATTERN.match(remainder)
        revision = match.group(0) if match else remainder

    tags: tuple[str, ...] = ()
    index = _find_line(lines, EXISTING_TAGS_MARKER)
    if index is not None:
        inline = _after_colon(lines[index]).split()
        if inline:
            tags = tuple(inline)
        else:
            # Real clients print one tag per indented line below the header
            tags = tuple(row[0] for row in _tag_block(lines, index))

    if not (filename or revision or tags):
        logger.debug("No status markers found in output: %r", text[:200])

    return CvsInfo(filename=filename, revision=revision, tags=tags)


def parse_latest_tag(text: str) -> list[str]:
    """Return the tags that point at the repository head revision.

    Reads the first dotted revision on the `Repository revision` line,
    then the indented `<tag> (<kind>: <revision>)` rows after
    `Existing Tags:`, keeping the tags whose revision matches. This relies
    on CVS's pretty-printed layout and is best-effort.

    Args:
        text: Decoded stdout of `cvs status -v <file>`.

    Returns:
        Matching tag names in listing order, or an empty list.
    """
    lines = text.splitlines()

    index = _find_line(lines, REPOSITORY_REVISION_MARKER)
    if index is None:
        return []
    match = _REVISION_PATTERN.search(lines[index])
    if match is None:
        logger.debug("No revision on repository line: %r", lines[index])
        return []
    head = match.group(0)

    header = _find_line(lines, EXISTING_TAGS_MARKER)
    if header is None:
        return []

    latest: list[str] = []
    for row in _tag_block(lines, header):
        revision = row[2].replace("(", "").replace(")", "")
        if revision == head:
            latest.append(row[0])
    return latest
