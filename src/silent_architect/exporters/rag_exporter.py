"""RAG dataset exporter."""

import json

from schemas.issue import DailyIssue
from schemas.rag import RagChunk

from .exporter import Exporter, safe_date


def build_rag_chunks(issue: DailyIssue) -> list[RagChunk]:
    """Flatten an issue into one retrieval chunk per article."""
    return [
        RagChunk(
            date=issue.date,
            theme=f"{issue.theme} ({issue.theme_sub})",
            category=article.category_name,
            focus_sentence=article.focus_sentence,
            content_body=article.body,
            source_link=article.link,
            historical_context=article.lineage or "",
            future_prediction=article.future_speak or "",
            keywords=issue.intro.keywords,
            global_trend_vector=issue.intro.vector,
        )
        for article in issue.articles
    ]


class RagDatasetExporter(Exporter):
    """Exports an issue as a JSON array of chunks for vector databases."""

    def filename(self, issue: DailyIssue) -> str:
        return f"TSA_Dataset_{safe_date(issue.date)}.json"

    def render(self, issue: DailyIssue) -> str:
        chunks = [chunk.model_dump() for chunk in build_rag_chunks(issue)]
        return json.dumps(chunks, indent=2, ensure_ascii=False)
