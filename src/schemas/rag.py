"""RAG dataset chunk schema.

Each article of an issue is flattened into one chunk carrying the issue-level
context (theme, keywords, trend vector) it belongs to, so that chunks can be
embedded independently in a vector store.
"""

from pydantic import BaseModel


class RagChunk(BaseModel):
    """One retrieval chunk derived from a single article.

    Attributes:
        date: Issue date
        theme: "<theme> (<themeSub>)"
        category: Article category name
        focus_sentence: Article focus sentence
        content_body: Article body
        source_link: Article link
        historical_context: Article lineage, or empty
        future_prediction: Article future vector, or empty
        keywords: Issue intro keywords
        global_trend_vector: Issue intro vector
    """

    date: str
    theme: str
    category: str
    focus_sentence: str
    content_body: str
    source_link: str
    historical_context: str = ""
    future_prediction: str = ""
    keywords: str = ""
    global_trend_vector: str = ""
