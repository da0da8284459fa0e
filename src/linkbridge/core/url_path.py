"""Target path validation and normalization.

A canonical path always has exactly one leading and one trailing slash,
at least one segment, and no query, fragment or parameter delimiters.
"""

import re
from dataclasses import dataclass

from linkbridge.errors import InvalidPathError

# Segments of anything but "/", ";", "#" or "?", joined by single slashes
_PATH_PATTERN = re.compile(r"/?[^/;#?]+(?:/[^/;#?]+)*/?")


@dataclass(frozen=True)
class CanonicalPath:
    """Validated, slash-normalized target path.

    Construct through normalize() or CanonicalPath.parse(). Passing a value
    that is not already canonical raises InvalidPathError.
    """

    value: str

    def __post_init__(self) -> None:
        if not (
            self.value.startswith("/")
            and self.value.endswith("/")
            and _PATH_PATTERN.fullmatch(self.value)
        ):
            raise InvalidPathError(self.value)

    @classmethod
    def parse(cls, raw: str) -> "CanonicalPath":
        """Validate and normalize a raw path.

        Args:
            raw: Target path with or without leading/trailing slashes

        Returns:
            CanonicalPath instance

        Raises:
            InvalidPathError: If the path is empty, root-only, or contains
                forbidden characters or empty segments
        """
        if not _PATH_PATTERN.fullmatch(raw):
            raise InvalidPathError(raw)

        path = raw
        if not path.startswith("/"):
            path = f"/{path}"
        if not path.endswith("/"):
            path = f"{path}/"
        return cls(path)

    def utf16_units(self) -> list[int]:
        """Return the UTF-16 code units of the path string."""
        data = self.value.encode("utf-16-le")
        return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]

    def __str__(self) -> str:
        return self.value


def normalize(raw: str) -> CanonicalPath:
    """Validate and normalize a raw path into its canonical form."""
    return CanonicalPath.parse(raw)
