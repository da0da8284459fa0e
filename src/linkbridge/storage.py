"""Filesystem access for redirect output.

Redirect pages and the registry are written through a FileSystem so the
orchestration can be exercised against an alternative implementation.
LocalFileSystem raises plain OSError; callers translate it into StorageError.
"""

import os
import tempfile
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Filesystem operations used by the redirector and registry."""

    def exists(self, path: Path) -> bool: ...

    def create_dir(self, path: Path) -> None: ...

    def read_file(self, path: Path) -> str: ...

    def write_file(self, path: Path, content: str) -> None: ...

    def atomic_replace(self, path: Path, content: str) -> None: ...

    def remove_file(self, path: Path) -> None: ...


class LocalFileSystem:
    """FileSystem backed by the local disk.

    Writes go to a temporary file in the destination directory, are flushed
    and fsynced, then moved into place (hard-linked for new files, renamed for
    replacements). A concurrent reader sees either the old content or the
    complete new content.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def create_dir(self, path: Path) -> None:
        """Create directory and any missing parents."""
        path.mkdir(parents=True, exist_ok=True)

    def read_file(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_file(self, path: Path, content: str) -> None:
        """Durably write a new file.

        The content is hard-linked into place, so an existing file, including
        one created concurrently, is never replaced.

        Raises:
            FileExistsError: If path already exists
        """
        tmp_name = self._write_temp(path, content)
        try:
            os.link(tmp_name, path)
        finally:
            Path(tmp_name).unlink(missing_ok=True)

    def atomic_replace(self, path: Path, content: str) -> None:
        """Durably write a file, replacing any existing content."""
        tmp_name = self._write_temp(path, content)
        try:
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_file(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    def _write_temp(self, path: Path, content: str) -> str:
        """Write content to a flushed, fsynced temporary file beside path."""
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return tmp_name
