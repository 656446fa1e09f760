"""
Workspace model: a flat, path-keyed map of text files.

Paths are ``/``-delimited keys; there are no directory nodes.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, Iterator, Mapping, Optional


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class FileRecord:
    content: str
    created: str
    modified: str
    streaming: bool = False

    @classmethod
    def fresh(cls, content: str) -> "FileRecord":
        """Record for content whose original timestamps are unknown (sync/revert)."""
        now = utc_now_iso()
        return cls(content=content, created=now, modified=now, streaming=False)


class Workspace:
    """Mutable file map owned by a single session."""

    def __init__(self, files: Optional[Mapping[str, FileRecord]] = None):
        self._files: Dict[str, FileRecord] = dict(files or {})

    def get_files(self) -> Dict[str, FileRecord]:
        return dict(self._files)

    def replace_files(self, files: Mapping[str, FileRecord]) -> None:
        self._files = dict(files)

    def create_or_update_file(self, path: str, content: str) -> str:
        """Write ``content`` at ``path``, keeping the original creation time.

        Returns:
            "created" or "updated"
        """
        now = utc_now_iso()
        existing = self._files.get(path)
        if existing is not None:
            self._files[path] = replace(existing, content=content, modified=now)
            return "updated"
        self._files[path] = FileRecord(content=content, created=now, modified=now)
        return "created"

    def delete_file(self, path: str) -> bool:
        if path not in self._files:
            return False
        del self._files[path]
        return True

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __repr__(self) -> str:
        return f"Workspace(files={len(self._files)})"
