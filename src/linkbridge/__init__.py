"""link-bridge - static HTML redirects from short names to longer paths on your site."""

from linkbridge.core.url_path import CanonicalPath, normalize
from linkbridge.errors import (
    InvalidPathError,
    RedirectorError,
    RegistryCorruptError,
    ShortLinkNotFoundError,
    StorageError,
)
from linkbridge.redirector import Redirector, create_redirect

__all__ = [
    "CanonicalPath",
    "InvalidPathError",
    "Redirector",
    "RedirectorError",
    "RegistryCorruptError",
    "ShortLinkNotFoundError",
    "StorageError",
    "create_redirect",
    "normalize",
]
