"""Per-directory registry of generated redirects.

Registry structure:
    <output_dir>/
    ├── registry.json        # {"/canonical/path/": "<name>.html"}
    └── <name>.html          # Redirect documents

Entries hold file names relative to the output directory, so a lookup can be
joined with however the current caller spells that directory.

The registry is what makes redirect creation idempotent: a canonical path
that already has an entry is never given a second file.
"""

import json
import logging
import threading
from pathlib import Path

from linkbridge.core.url_path import CanonicalPath
from linkbridge.errors import RegistryCorruptError, StorageError
from linkbridge.storage import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "registry.json"

_locks_guard = threading.Lock()
_directory_locks: dict[Path, threading.Lock] = {}


def directory_lock(directory: Path) -> threading.Lock:
    """Return the in-process lock guarding a directory's registry.

    Locks are keyed on the resolved path so different spellings of the same
    directory share one lock. Other processes are not coordinated.
    """
    key = directory.resolve()
    with _locks_guard:
        lock = _directory_locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _directory_locks[key] = lock
        return lock


class RedirectRegistry:
    """Loads, queries and saves the canonical path to file name mapping."""

    def __init__(self, fs: FileSystem | None = None) -> None:
        """Initialize registry access.

        Args:
            fs: Filesystem implementation (default: LocalFileSystem)
        """
        self._fs = fs if fs is not None else LocalFileSystem()

    @staticmethod
    def registry_path(directory: Path) -> Path:
        """Location of the registry file inside an output directory."""
        return directory / REGISTRY_FILENAME

    def load(self, directory: Path) -> dict[str, str]:
        """Read the registry for a directory.

        Args:
            directory: Output directory

        Returns:
            Mapping of canonical path to file name, empty if no registry exists

        Raises:
            RegistryCorruptError: If the file is not a JSON object of strings
            StorageError: If the file exists but cannot be read
        """
        path = self.registry_path(directory)
        if not self._fs.exists(path):
            logger.debug(f"No registry at {path}")
            return {}

        try:
            text = self._fs.read_file(path)
        except OSError as e:
            raise StorageError("Failed to read registry", path) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RegistryCorruptError(path, f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise RegistryCorruptError(path, "expected a JSON object")
        for key, value in data.items():
            if not isinstance(value, str):
                raise RegistryCorruptError(path, f"entry {key!r} is not a string")

        logger.debug(f"Loaded {len(data)} registry entries from {path}")
        return data

    @staticmethod
    def lookup(entries: dict[str, str], path: CanonicalPath) -> str | None:
        """Return the registered file name for a canonical path, if any.

        The name is relative to the output directory the entries were loaded from.
        """
        return entries.get(str(path))

    def save(self, directory: Path, entries: dict[str, str]) -> None:
        """Write the full mapping, replacing the existing registry file.

        Raises:
            StorageError: If the registry cannot be written
        """
        path = self.registry_path(directory)
        content = json.dumps(entries, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
        try:
            self._fs.atomic_replace(path, content)
        except OSError as e:
            raise StorageError("Failed to write registry", path) from e
        logger.info(f"Saved {len(entries)} registry entries to {path}")
