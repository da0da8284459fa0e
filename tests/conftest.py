"""Shared test fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output directory that does not exist yet."""
    return tmp_path / "s"


@pytest.fixture
def fixed_instant() -> datetime:
    """A fixed generation instant (2024-01-01T00:00:00Z)."""
    return datetime(2024, 1, 1, tzinfo=UTC)
