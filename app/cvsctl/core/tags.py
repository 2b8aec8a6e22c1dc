"""Tag bookmark persistence.

This module provides a small JSON key/value store and the TagStore that
keeps, per tag name, the ordered list of files last tagged with it.

Storage location: ~/.local/state/cvsctl/store.json
"""

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from cvsctl.core.paths import get_store_path
from cvsctl.models.status import FileDetail

logger = logging.getLogger(__name__)


class KeyValueStore:
    """JSON-backed string-keyed store.

    The whole file is read on every access and rewritten atomically on
    every change. A missing or corrupt file reads as empty.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Optional override for the store file.
                  Default: ~/.local/state/cvsctl/store.json
        """
        self._path = path if path is not None else get_store_path()

    @property
    def path(self) -> Path:
        """Path to the store file."""
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ignoring corrupt store file %s: %s", self._path, e)
            return {}
        except OSError as e:
            logger.warning("Cannot read store file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self._path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(str(tmp_path), str(self._path))
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        """Remove key if present."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        """Remove every key."""
        self._write({})


class TagStore:
    """Bookmarks of tag names and the files tagged with them.

    Tags are kept most-recent-first. Each tag's files live under their own
    key so a tag can be dropped without rewriting the others.
    """

    TAGS_KEY = "tags"
    FILES_KEY_PREFIX = "tag-files-"

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store if store is not None else KeyValueStore()

    @classmethod
    def _files_key(cls, tag: str) -> str:
        return f"{cls.FILES_KEY_PREFIX}{tag}"

    def get_tags(self) -> list[str]:
        """Return all tags, most recently added first."""
        tags = self._store.get(self.TAGS_KEY, [])
        if not isinstance(tags, list):
            return []
        return [tag for tag in tags if isinstance(tag, str)]

    def add_tag(self, tag: str) -> list[str]:
        """Add a tag, or move it to the front if already present.

        Args:
            tag: Tag name.

        Returns:
            The updated tag list.

        Raises:
            ValueError: If the tag name is empty.
        """
        if not tag:
            msg = "Tag name cannot be empty"
            raise ValueError(msg)
        tags = [t for t in self.get_tags() if t != tag]
        tags.insert(0, tag)
        self._store.set(self.TAGS_KEY, tags)
        return tags

    def remove_tag(self, tag: str) -> bool:
        """Remove a tag together with its file list.

        Returns:
            True if the tag existed, False otherwise.
        """
        tags = self.get_tags()
        if tag not in tags:
            return False
        tags.remove(tag)
        self._store.set(self.TAGS_KEY, tags)
        self._store.delete(self._files_key(tag))
        return True

    def get_tag_files(self, tag: str) -> list[FileDetail]:
        """Return the files recorded for a tag, skipping corrupt entries."""
        raw = self._store.get(self._files_key(tag), [])
        if not isinstance(raw, list):
            return []

        files: list[FileDetail] = []
        for item in raw:
            try:
                files.append(FileDetail.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping corrupt file entry for tag %s: %s", tag, e)
        return files

    def set_tag_files(self, tag: str, files: list[FileDetail]) -> None:
        """Replace the files recorded for a tag."""
        self._store.set(self._files_key(tag), [f.to_dict() for f in files])

    def clear_tags(self) -> None:
        """Remove every tag and its file list."""
        for tag in self.get_tags():
            self._store.delete(self._files_key(tag))
        self._store.delete(self.TAGS_KEY)
