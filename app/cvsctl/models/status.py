"""Status models for files tracked in a CVS working copy.

This module defines the file status enumeration, the metadata record
parsed from `cvs status -v`, and the file descriptor persisted by the
tag bookmark store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FileStatus(Enum):
    """Status of a single file relative to its CVS repository.

    Attributes:
        UNKNOWN: CVS reported a status this tool does not recognise.
        MODIFIED: Working copy has local modifications.
        ADDED: File is scheduled for addition.
        REMOVED: File is scheduled for removal.
        CONFLICT: An update left unresolved merge conflicts.
        UP_TO_DATE: Working copy matches the repository head.
        NOT_CVS_FILE: Directory has no CVS metadata.
        LOADING: Status query has not completed yet.
        ERROR: Status query failed.
        NOT_FOUND: File does not exist on disk.
    """

    UNKNOWN = "unknown"
    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"
    CONFLICT = "conflict"
    UP_TO_DATE = "up-to-date"
    NOT_CVS_FILE = "not-cvs-file"
    LOADING = "loading"
    ERROR = "error"
    NOT_FOUND = "not-found"

    @property
    def is_transient(self) -> bool:
        """Check if this is a client-side state never reported by CVS."""
        return self in (FileStatus.LOADING, FileStatus.ERROR, FileStatus.NOT_FOUND)

    @property
    def is_cvs_reported(self) -> bool:
        """Check if this state is derived from CVS output."""
        return not self.is_transient

    @property
    def label(self) -> str:
        """Return a human-readable label."""
        return _LABELS[self]


_LABELS: dict[FileStatus, str] = {
    FileStatus.UNKNOWN: "Unknown",
    FileStatus.MODIFIED: "Modified",
    FileStatus.ADDED: "Added",
    FileStatus.REMOVED: "Removed",
    FileStatus.CONFLICT: "Conflict",
    FileStatus.UP_TO_DATE: "Up-to-date",
    FileStatus.NOT_CVS_FILE: "Not a CVS file",
    FileStatus.LOADING: "Loading",
    FileStatus.ERROR: "Error",
    FileStatus.NOT_FOUND: "Not found",
}


@dataclass(frozen=True, slots=True)
class CvsInfo:
    """Metadata for one file as reported by `cvs status -v`.

    Attributes:
        filename: Filename as printed by CVS (may differ cosmetically from
            the local basename).
        revision: Working revision (e.g. '1.4'), empty if not reported.
        tags: Tag names in the order CVS listed them.
    """

    filename: str = ""
    revision: str = ""
    tags: tuple[str, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "filename": self.filename,
            "revision": self.revision,
            "tags": list(self.tags),
        }


@dataclass(slots=True)
class FileDetail:
    """A file shown to the user, with its last observed status.

    Attributes:
        name: Display name (normally the basename).
        path: Full path to the file.
        selected: Whether the file is selected for the next operation.
        status: Last observed status; LOADING until a query completes.
    """

    name: str
    path: str
    selected: bool = True
    status: FileStatus = FileStatus.LOADING

    def __post_init__(self) -> None:
        """Validate file data after initialization."""
        if not self.path:
            msg = "File path cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the file detail.
        """
        return {
            "name": self.name,
            "path": self.path,
            "selected": self.selected,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileDetail":
        """Deserialize from dictionary.

        Unrecognised status values fall back to LOADING so that a stored
        bookmark is re-queried rather than rejected.

        Args:
            data: Dictionary containing file data.

        Returns:
            FileDetail instance.

        Raises:
            KeyError: If the path field is missing.
            ValueError: If the path is empty.
        """
        try:
            status = FileStatus(data.get("status", FileStatus.LOADING.value))
        except ValueError:
            status = FileStatus.LOADING
        path = data["path"]
        return cls(
            name=data.get("name") or path,
            path=path,
            selected=bool(data.get("selected", True)),
            status=status,
        )
