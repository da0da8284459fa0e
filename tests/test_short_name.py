"""Tests for short name generation."""

import time
from datetime import UTC, datetime, timedelta

import pytest
from linkbridge.core.short_name import (
    BASE62_ALPHABET,
    compute_seed,
    encode_base62,
    epoch_millis,
    generate_short_name,
    utf16_sum,
)
from linkbridge.core.url_path import normalize


class TestEncodeBase62:
    """Tests for encode_base62()."""

    @pytest.mark.parametrize(
        ("number", "expected"),
        [(0, "0"), (9, "9"), (10, "A"), (35, "Z"), (36, "a"), (61, "z"), (62, "10"), (3843, "zz")],
    )
    def test__known_values(self, number: int, expected: str) -> None:
        """Encode with the 0-9A-Za-z alphabet."""
        assert encode_base62(number) == expected

    def test__negative__raises(self) -> None:
        """Negative numbers are rejected."""
        with pytest.raises(ValueError):
            encode_base62(-1)

    def test__alphabet_is_62_unique_characters(self) -> None:
        assert len(set(BASE62_ALPHABET)) == 62


class TestSeed:
    """Tests for seed computation."""

    def test__epoch_millis__aware(self) -> None:
        """Count whole milliseconds since the Unix epoch."""
        instant = datetime(1970, 1, 1, 0, 0, 1, 2500, tzinfo=UTC)

        assert epoch_millis(instant) == 1002

    def test__epoch_millis__naive_taken_as_utc(self) -> None:
        """Naive datetimes are interpreted as UTC."""
        assert epoch_millis(datetime(2024, 1, 1)) == epoch_millis(
            datetime(2024, 1, 1, tzinfo=UTC),
        )

    def test__utf16_sum(self) -> None:
        """Sum UTF-16 code units of the canonical string."""
        assert utf16_sum(normalize("ab")) == 47 + 97 + 98 + 47

    def test__seed_adds_time_and_content(self, fixed_instant: datetime) -> None:
        """Seed is milliseconds plus the path sum."""
        path = normalize("some/path")

        assert compute_seed(path, fixed_instant) == 1_704_067_200_000 + utf16_sum(path)


class TestGenerateShortName:
    """Tests for generate_short_name()."""

    def test__html_suffix(self, fixed_instant: datetime) -> None:
        """Names end with .html and use only base-62 characters."""
        name = generate_short_name(normalize("some/path"), fixed_instant)

        token, suffix = name[: -len(".html")], name[-len(".html") :]
        assert suffix == ".html"
        assert token
        assert set(token) <= set(BASE62_ALPHABET)

    def test__deterministic_for_fixed_instant(self, fixed_instant: datetime) -> None:
        """Same path and instant give the same name."""
        path = normalize("some/path")

        assert generate_short_name(path, fixed_instant) == generate_short_name(
            path,
            fixed_instant,
        )

    def test__matches_encoded_seed(self, fixed_instant: datetime) -> None:
        path = normalize("some/path")

        name = generate_short_name(path, fixed_instant)

        assert name == f"{encode_base62(compute_seed(path, fixed_instant))}.html"

    def test__different_instants__differ(self, fixed_instant: datetime) -> None:
        """One millisecond apart gives a different name."""
        path = normalize("some/path")
        later = fixed_instant + timedelta(milliseconds=1)

        assert generate_short_name(path, fixed_instant) != generate_short_name(path, later)

    def test__different_paths__differ(self, fixed_instant: datetime) -> None:
        """Paths with different content differ at the same instant."""
        assert generate_short_name(normalize("api/v1"), fixed_instant) != generate_short_name(
            normalize("api/v2"),
            fixed_instant,
        )

    def test__anagram_paths__collide(self, fixed_instant: datetime) -> None:
        """Permutations of the same characters collide in the same millisecond."""
        assert generate_short_name(normalize("ab"), fixed_instant) == generate_short_name(
            normalize("ba"),
            fixed_instant,
        )

    def test__real_clock__distinct_after_sleep(self) -> None:
        """Names generated at least 1ms apart differ."""
        path = normalize("some/path")

        first = generate_short_name(path, datetime.now(UTC))
        time.sleep(0.002)
        second = generate_short_name(path, datetime.now(UTC))

        assert first != second
