"""Configuration loading from environment variables and memories.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from obsidian_memories.naming import FileNamingFormat

_DEFAULT_HOME = Path.home() / ".memories"
_CONFIG_FILENAME = "memories.toml"


@dataclass
class FrontmatterConfig:
    """Which fact categories are written into the YAML frontmatter.

    The note body always lists every fact; these flags only gate the
    frontmatter.
    """

    workout: bool = True
    song: bool = True
    podcast: bool = True
    photo: bool = True
    contact: bool = True
    reflection: bool = True
    state_of_mind: bool = True
    activity: bool = True


@dataclass
class ExportConfig:
    """Top-level export configuration."""

    naming_format: FileNamingFormat = FileNamingFormat.COMPACT
    default_tags: list[str] = field(default_factory=lambda: ["memories"])
    manual_entry_tags: list[str] = field(default_factory=lambda: ["memories", "manual"])
    frontmatter: FrontmatterConfig = field(default_factory=FrontmatterConfig)
    export_dir: Path = _DEFAULT_HOME / "exports"
    places_file: Path = _DEFAULT_HOME / "places.json"
    weather_timeout: float | None = None
    log_level: str = "INFO"


def _optional_float(value: object) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def load_config(config_path: Path | None = None) -> ExportConfig:
    """Load configuration from environment variables and optional memories.toml.

    Priority: environment variables > memories.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.memories/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_HOME / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    tags_data = file_data.get("tags", {})
    frontmatter_data = file_data.get("frontmatter", {})
    defaults = FrontmatterConfig()

    config = ExportConfig(
        naming_format=FileNamingFormat.parse(
            os.getenv("MEMORIES_NAMING_FORMAT", file_data.get("naming_format", "compact"))
        ),
        default_tags=list(tags_data.get("default", ["memories"])),
        manual_entry_tags=list(tags_data.get("manual", ["memories", "manual"])),
        frontmatter=FrontmatterConfig(
            **{
                name: bool(frontmatter_data.get(name, getattr(defaults, name)))
                for name in (f.name for f in fields(FrontmatterConfig))
            }
        ),
        export_dir=Path(
            os.getenv("MEMORIES_EXPORT_DIR", file_data.get("export_dir", str(_DEFAULT_HOME / "exports")))
        ).expanduser(),
        places_file=Path(
            file_data.get("places_file", str(_DEFAULT_HOME / "places.json"))
        ).expanduser(),
        weather_timeout=_optional_float(
            os.getenv("MEMORIES_WEATHER_TIMEOUT", file_data.get("weather_timeout"))
        ),
        log_level=os.getenv("MEMORIES_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
