"""Short file name generation.

Names are base-62 encodings of a numeric seed built from the current time
and the target path, so the same target requested at different instants
yields different names.

The path contribution is the sum of the path's UTF-16 code units. This is a
cheap content-dependent perturbation, not a hash: it ignores character order,
so two paths that are permutations of each other and are requested in the
same millisecond produce the same name. The registry guarantees a target is
never named twice, so only that residual case can collide.
"""

from datetime import UTC, datetime

from linkbridge.core.types import SHORT_NAME_SUFFIX, ShortName
from linkbridge.core.url_path import CanonicalPath

BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def encode_base62(number: int) -> str:
    """Encode a non-negative integer in base 62 without padding.

    Args:
        number: Value to encode

    Returns:
        Base-62 string using the 0-9A-Za-z alphabet

    Raises:
        ValueError: If number is negative
    """
    if number < 0:
        raise ValueError(f"Cannot encode negative number: {number}")
    if number == 0:
        return BASE62_ALPHABET[0]

    digits: list[str] = []
    while number:
        number, remainder = divmod(number, len(BASE62_ALPHABET))
        digits.append(BASE62_ALPHABET[remainder])
    return "".join(reversed(digits))


def epoch_millis(now: datetime) -> int:
    """Whole milliseconds since the Unix epoch. Naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    delta = now - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def utf16_sum(path: CanonicalPath) -> int:
    """Sum of the UTF-16 code units of the canonical path string."""
    return sum(path.utf16_units())


def compute_seed(path: CanonicalPath, now: datetime) -> int:
    """Numeric seed for a (path, instant) pair."""
    return epoch_millis(now) + utf16_sum(path)


def generate_short_name(path: CanonicalPath, now: datetime) -> ShortName:
    """Derive the redirect file name for a path at a given instant.

    Pure function of (path, now).

    Args:
        path: Canonical target path
        now: Generation instant

    Returns:
        File name such as "1a2B3cD.html"
    """
    return ShortName(f"{encode_base62(compute_seed(path, now))}{SHORT_NAME_SUFFIX}")
