"""Configuration management for link-bridge.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from linkbridge.core.document import DEFAULT_LANG, DEFAULT_TITLE
from linkbridge.redirector import DEFAULT_OUTPUT_DIR

CONFIG_FILENAME = "linkbridge.toml"


@dataclass
class OutputConfig:
    """Output configuration."""

    dir: Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)


@dataclass
class DocumentConfig:
    """Redirect document configuration."""

    lang: str = DEFAULT_LANG
    title: str = DEFAULT_TITLE


@dataclass
class Config:
    """Application configuration."""

    output: OutputConfig
    document: DocumentConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for linkbridge.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(output=OutputConfig(), document=DocumentConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        output = cls._parse_output(data.get("output"), config_dir)
        document = cls._parse_document(data.get("document"))

        return cls(output=output, document=document, config_path=path)

    @classmethod
    def _parse_output(cls, data: object, config_dir: Path) -> OutputConfig:
        """Parse output configuration section.

        Args:
            data: Raw output section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            OutputConfig instance
        """
        if data is None:
            return OutputConfig(dir=config_dir / DEFAULT_OUTPUT_DIR)

        if not isinstance(data, dict):
            raise ValueError("output section must be a dictionary")

        output_dir = data.get("dir", str(DEFAULT_OUTPUT_DIR))
        if not isinstance(output_dir, str):
            raise ValueError("output.dir must be a string")

        return OutputConfig(dir=config_dir / output_dir)

    @classmethod
    def _parse_document(cls, data: object) -> DocumentConfig:
        if data is None:
            return DocumentConfig()

        if not isinstance(data, dict):
            raise ValueError("document section must be a dictionary")

        lang = data.get("lang", DEFAULT_LANG)
        if not isinstance(lang, str):
            raise ValueError("document.lang must be a string")

        title = data.get("title", DEFAULT_TITLE)
        if not isinstance(title, str):
            raise ValueError("document.title must be a string")

        return DocumentConfig(lang=lang, title=title)

    def with_overrides(self, *, output_dir: Path | None = None) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            output_dir: Override output.dir

        Returns:
            New Config instance with overrides applied
        """
        output = self.output
        if output_dir is not None:
            output = replace(self.output, dir=output_dir)

        return replace(self, output=output)
