"""Export folder — where finished notes land (usually inside an Obsidian vault).

Markdown files are written as-is. Reading back uses python-frontmatter so
that exported notes can be listed by date and tags.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import frontmatter

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Writing a note failed; the message is the OS error, unchanged."""


class ExportExistsError(ExportError):
    """A note with the same filename already exists."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} already exists")
        self.path = path


class ExportFolder:
    """Write access to the default export folder."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _safe_name(self, filename: str) -> str:
        """Strip path separators and other characters no filesystem accepts."""
        name = re.sub(r'[<>"/\\|?*\n\r\t]', "", filename).strip()
        return name or "memory.md"

    def path_for(self, filename: str) -> Path:
        return self.root / self._safe_name(filename)

    def save(self, filename: str, markdown: str, *, overwrite: bool = False) -> Path:
        """Write `markdown` under `filename`.

        Raises ExportExistsError when the file is already there and
        `overwrite` is False, ExportError when the write itself fails.
        """
        path = self.path_for(filename)
        if path.exists() and not overwrite:
            raise ExportExistsError(path)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp = path.with_name(path.name + ".tmp")
            tmp.write_text(markdown, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise ExportError(str(e)) from e
        logger.info("Saved note: %s (%d chars)", path, len(markdown))
        return path

    def _parse_frontmatter(self, path: Path) -> dict:
        """Parse YAML frontmatter from a markdown file."""
        try:
            post = frontmatter.load(str(path))
            return dict(post.metadata)
        except Exception:
            return {}

    def list_notes(self) -> list[dict]:
        """Exported notes, newest first by `date_created`."""
        if not self.root.is_dir():
            return []
        notes = []
        for md_file in self.root.glob("*.md"):
            meta = self._parse_frontmatter(md_file)
            notes.append(
                {
                    "name": md_file.stem,
                    "path": md_file,
                    "date_created": str(meta.get("date_created", "")),
                    "tags": list(meta.get("tags") or []),
                    "place": meta.get("place"),
                }
            )
        notes.sort(key=lambda n: n["date_created"], reverse=True)
        return notes
