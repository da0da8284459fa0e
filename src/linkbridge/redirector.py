"""Redirect creation.

Combines path validation, short name generation, document rendering and the
registry into a single create-or-reuse operation per target path.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from linkbridge.core.document import DEFAULT_LANG, DEFAULT_TITLE, render
from linkbridge.core.registry import RedirectRegistry, directory_lock
from linkbridge.core.short_name import generate_short_name
from linkbridge.core.types import ShortName
from linkbridge.core.url_path import CanonicalPath, normalize
from linkbridge.errors import ShortLinkNotFoundError, StorageError
from linkbridge.storage import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("s")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Redirector:
    """Creates a static redirect page for one target path.

    The target is validated on construction. The short name is generated on
    first use and reused afterwards, so changing the output directory before
    writing keeps the same name. The registry is read from disk on every
    write; nothing is cached between calls.
    """

    def __init__(
        self,
        target: str,
        output_dir: Path | str = DEFAULT_OUTPUT_DIR,
        *,
        fs: FileSystem | None = None,
        clock: Callable[[], datetime] | None = None,
        lang: str = DEFAULT_LANG,
        title: str = DEFAULT_TITLE,
    ) -> None:
        """Initialize redirector.

        Args:
            target: Target path on the website (e.g., "blog/2024/post")
            output_dir: Directory receiving the redirect pages
            fs: Filesystem implementation (default: LocalFileSystem)
            clock: Source of the generation instant (default: current UTC time)
            lang: html lang attribute of generated pages
            title: Title of generated pages

        Raises:
            InvalidPathError: If target is not a valid path
        """
        self._target = normalize(target)
        self._output_dir = Path(output_dir)
        self._fs = fs if fs is not None else LocalFileSystem()
        self._clock = clock if clock is not None else _utc_now
        self._lang = lang
        self._title = title
        self._short_name: ShortName | None = None
        self._registry = RedirectRegistry(self._fs)

    @property
    def target(self) -> CanonicalPath:
        """Canonical target path."""
        return self._target

    @property
    def output_dir(self) -> Path:
        """Directory receiving the redirect page."""
        return self._output_dir

    @property
    def short_name(self) -> ShortName | None:
        """Generated file name, or None before generation."""
        return self._short_name

    def set_output_dir(self, output_dir: Path | str) -> None:
        """Change the output directory before writing."""
        self._output_dir = Path(output_dir)

    def generate_short_name(self) -> ShortName:
        """Generate the short name if needed and return it."""
        if self._short_name is None:
            self._short_name = generate_short_name(self._target, self._clock())
            logger.debug(f"Generated short name {self._short_name} for {self._target}")
        return self._short_name

    def render(self) -> str:
        """Render the redirect document for the target."""
        return render(self._target, lang=self._lang, title=self._title)

    def write_document(self) -> Path:
        """Write the redirect page under the current short name.

        Does not consult or update the registry.

        Returns:
            Path of the written file (output directory joined with the short name)

        Raises:
            ShortLinkNotFoundError: If no short name has been generated
            StorageError: If the file cannot be written
        """
        if self._short_name is None:
            raise ShortLinkNotFoundError()

        file_path = self._output_dir / self._short_name
        try:
            self._fs.write_file(file_path, self.render())
        except OSError as e:
            raise StorageError("Failed to create redirect file", file_path) from e
        return file_path

    def write_redirect(self) -> str:
        """Create the redirect page, or return the one already registered.

        Returns:
            File path of the redirect page

        Raises:
            StorageError: If the directory or files cannot be written
            RegistryCorruptError: If the registry file cannot be parsed
        """
        self._ensure_output_dir()

        with directory_lock(self._output_dir):
            entries = self._registry.load(self._output_dir)
            existing = self._registry.lookup(entries, self._target)
            if existing is not None:
                file_path = str(self._output_dir / existing)
                logger.debug(f"Reusing {file_path} for {self._target}")
                return file_path

            short_name = self.generate_short_name()
            written = self.write_document()

            entries[str(self._target)] = short_name
            try:
                self._registry.save(self._output_dir, entries)
            except StorageError:
                # Unregistered pages are never reused; drop it and the name
                self._fs.remove_file(written)
                self._short_name = None
                raise

        logger.info(f"Created redirect {written} -> {self._target}")
        return str(written)

    def _ensure_output_dir(self) -> None:
        if self._fs.exists(self._output_dir):
            return
        logger.debug(f"Creating output directory {self._output_dir}")
        try:
            self._fs.create_dir(self._output_dir)
        except OSError as e:
            raise StorageError("Failed to create output directory", self._output_dir) from e

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"Redirector(target={str(self._target)!r}, "
            f"output_dir={str(self._output_dir)!r}, "
            f"short_name={self._short_name!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Redirector):
            return NotImplemented
        return (
            self._target == other._target
            and self._output_dir == other._output_dir
            and self._short_name == other._short_name
        )


def create_redirect(target: str, output_dir: Path | str = DEFAULT_OUTPUT_DIR) -> str:
    """Create (or reuse) a redirect page for target in output_dir.

    Returns:
        File path of the redirect page
    """
    return Redirector(target, output_dir).write_redirect()
