"""Base class for issue exporters.

Exporters turn a completed issue into a downloadable file for downstream
tools. They report success as a boolean and never raise.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from schemas.issue import DailyIssue

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def safe_date(date: str) -> str:
    """Make an issue date usable in a file name."""
    return _UNSAFE_CHARS.sub("_", date)


class Exporter(ABC):
    """Abstract base class for issue exporters.

    Subclasses define the file name and render the file content; ``export``
    writes it and turns any failure into a False result.
    """

    @abstractmethod
    def filename(self, issue: DailyIssue) -> str:
        """Name of the file written for an issue."""
        pass

    @abstractmethod
    def render(self, issue: DailyIssue) -> str:
        """Render the file content for an issue."""
        pass

    def output_path(self, issue: DailyIssue, output_dir: Path) -> Path:
        return output_dir / self.filename(issue)

    def export(self, issue: DailyIssue, output_dir: Path) -> bool:
        """Write the export for an issue into output_dir.

        Args:
            issue: The issue to export
            output_dir: Directory to write into (created if missing)

        Returns:
            True if the file was written, False otherwise
        """
        try:
            content = self.render(issue)
            output_dir.mkdir(parents=True, exist_ok=True)
            path = self.output_path(issue, output_dir)
            path.write_text(content, encoding="utf-8")
        except Exception as e:
            logger.error(f"{self.__class__.__name__} failed for {issue.date}: {e}")
            return False

        logger.info(f"Exported {issue.date} to {path}")
        return True
