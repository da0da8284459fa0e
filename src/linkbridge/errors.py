"""Error types for link-bridge.

All failures raised by the library derive from RedirectorError so callers
can catch a single type. Underlying causes are chained with ``raise ... from``.
"""

from pathlib import Path


class RedirectorError(Exception):
    """Base class for redirect creation failures."""


class InvalidPathError(RedirectorError, ValueError):
    """Target path failed validation."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid URL path: {path!r}")
        self.path = path


class StorageError(RedirectorError):
    """Directory creation, file write or read failed."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class RegistryCorruptError(RedirectorError):
    """Registry file exists but is not a string-to-string mapping."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Registry file {path} is corrupt: {reason}")
        self.path = path
        self.reason = reason


class ShortLinkNotFoundError(RedirectorError):
    """No short name has been generated for the redirect yet."""

    def __init__(self) -> None:
        super().__init__("Short link not found")
