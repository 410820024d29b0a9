"""Storage backends for the local archive.

A backend holds one slot: the serialized issue collection as JSON text.
The archive store reads it once at start-up and rewrites it on every save.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class ArchiveStorage(ABC):
    """Abstract single-slot text storage."""

    @abstractmethod
    def load(self) -> str | None:
        """Return the stored text, or None if nothing has been stored."""
        pass

    @abstractmethod
    def save(self, text: str) -> None:
        """Replace the stored text."""
        pass


class JsonFileStorage(ArchiveStorage):
    """Stores the archive as a JSON file on disk.

    Writes go to a sibling temporary file which is then renamed over the
    target, so a failed write leaves the previous archive intact.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JsonFileStorage('{self.path}')"

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug(f"Wrote archive to {self.path}")


class MemoryStorage(ArchiveStorage):
    """Keeps the archive text in memory."""

    def __init__(self, text: str | None = None):
        self.text = text

    def load(self) -> str | None:
        return self.text

    def save(self, text: str) -> None:
        self.text = text
