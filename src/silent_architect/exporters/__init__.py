"""Exporters producing downloadable files from issues."""

from .exporter import Exporter, safe_date
from .notebook_exporter import NotebookSourceExporter
from .rag_exporter import RagDatasetExporter, build_rag_chunks

EXPORTERS = {
    "rag": RagDatasetExporter,
    "notebook": NotebookSourceExporter,
}

__all__ = [
    "EXPORTERS",
    "Exporter",
    "NotebookSourceExporter",
    "RagDatasetExporter",
    "build_rag_chunks",
    "safe_date",
]
