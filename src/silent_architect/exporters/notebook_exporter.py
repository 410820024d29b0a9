"""NotebookLM source exporter.

Renders an issue as a sectioned plain-text document. NotebookLM ingests
Markdown-like text well, and explicit section headings help it keep the
issue's hierarchy apart.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from schemas.issue import DailyIssue

from .exporter import Exporter, safe_date

TEMPLATES_DIR = Path(__file__).parent.parent / "resources" / "templates"


class NotebookSourceExporter(Exporter):
    """Exports an issue as a NotebookLM text source.

    Attributes:
        template_name: Name of the Jinja2 template file
    """

    def __init__(
        self,
        template_name: str = "notebooklm_source.txt.j2",
        templates_dir: Path | None = None,
    ):
        """Initialize the exporter.

        Args:
            template_name: Name of the Jinja2 template file
            templates_dir: Directory containing templates (default: resources/templates)
        """
        self.template_name = template_name
        self.templates_dir = templates_dir or TEMPLATES_DIR

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def filename(self, issue: DailyIssue) -> str:
        return f"TSA_NotebookLM_Source_{safe_date(issue.date)}.txt"

    def render(self, issue: DailyIssue) -> str:
        template = self._env.get_template(self.template_name)
        return template.render(issue=issue)
