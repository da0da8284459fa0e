"""Tests for the local filesystem implementation."""

from pathlib import Path

import pytest
from linkbridge.storage import LocalFileSystem


class TestLocalFileSystem:
    """Tests for LocalFileSystem."""

    def test__create_dir__creates_parents(self, tmp_path: Path) -> None:
        """Create nested directories in one call."""
        fs = LocalFileSystem()
        target = tmp_path / "a" / "b" / "c"

        fs.create_dir(target)

        assert target.is_dir()
        assert fs.exists(target)

    def test__create_dir__existing_is_noop(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()

        fs.create_dir(tmp_path)

        assert tmp_path.is_dir()

    def test__write_file__writes_content(self, tmp_path: Path) -> None:
        """Write and read back UTF-8 text."""
        fs = LocalFileSystem()
        path = tmp_path / "page.html"

        fs.write_file(path, "<p>café</p>")

        assert fs.read_file(path) == "<p>café</p>"

    def test__write_file__refuses_overwrite(self, tmp_path: Path) -> None:
        """Existing files are never replaced by write_file."""
        fs = LocalFileSystem()
        path = tmp_path / "page.html"
        path.write_text("original")

        with pytest.raises(FileExistsError):
            fs.write_file(path, "new")

        assert path.read_text() == "original"

    def test__write_file__file_created_during_write__not_replaced(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A file appearing while content is being written is left intact."""
        fs = LocalFileSystem()
        path = tmp_path / "page.html"
        write_temp = fs._write_temp

        def write_temp_then_race(target: Path, content: str) -> str:
            tmp_name = write_temp(target, content)
            target.write_text("created concurrently")
            return tmp_name

        monkeypatch.setattr(fs, "_write_temp", write_temp_then_race)

        with pytest.raises(FileExistsError):
            fs.write_file(path, "new")

        assert path.read_text() == "created concurrently"
        assert [p.name for p in tmp_path.iterdir()] == ["page.html"]

    def test__remove_file(self, tmp_path: Path) -> None:
        """Remove a file; a missing file is not an error."""
        fs = LocalFileSystem()
        path = tmp_path / "page.html"
        path.write_text("x")

        fs.remove_file(path)
        fs.remove_file(path)

        assert not path.exists()

    def test__atomic_replace__overwrites(self, tmp_path: Path) -> None:
        """Replace existing content."""
        fs = LocalFileSystem()
        path = tmp_path / "registry.json"
        path.write_text("{}")

        fs.atomic_replace(path, '{"a": "b"}')

        assert path.read_text() == '{"a": "b"}'

    def test__no_temporary_files_left(self, tmp_path: Path) -> None:
        """Temporary files are renamed into place."""
        fs = LocalFileSystem()

        fs.write_file(tmp_path / "page.html", "x")
        fs.atomic_replace(tmp_path / "registry.json", "{}")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["page.html", "registry.json"]

    def test__write_into_missing_dir__raises_oserror(self, tmp_path: Path) -> None:
        """Missing parent directory surfaces as OSError."""
        fs = LocalFileSystem()

        with pytest.raises(OSError):
            fs.write_file(tmp_path / "missing" / "page.html", "x")
