"""Daily issue document schemas.

A DailyIssue is the canonical document produced by the generation service,
stored in the local archive, and exchanged with the Vault. Field names on the
wire are camelCase (``themeSub``, ``focusSentence``); the models accept either
the camelCase aliases or the snake_case attribute names on input.

Example document:
    {
        "date": "Saturday, April 12, 2025",
        "theme": "Digital Brutalism",
        "themeSub": "...",
        "intro": {"keywords": "", "intersection": "", "vector": "", "reflection": ""},
        "articles": [{"id": "k3j9x0a1b", "focusSentence": "...", ...}],
        "finalPrompt": "..."
    }
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class FourfoldIntro(BaseModel):
    """The four-part intro matrix of an issue.

    Attributes:
        keywords: Comma-separated keywords for the issue
        intersection: Where the issue's ideas meet
        vector: The forward trend the issue points at
        reflection: A closing philosophical question
    """

    keywords: str = ""
    intersection: str = ""
    vector: str = ""
    reflection: str = ""


class Article(BaseModel):
    """One content fragment within an issue.

    The id is opaque and not guaranteed stable: articles rebuilt from Vault
    rows receive a new id on every pull unless stable ids are requested.

    Attributes:
        id: Opaque article token
        category_code: Category code (e.g. "01", or "XX" when unknown)
        category_name: Human-readable category label
        focus_sentence: The article's core sentence; dedup key within an issue
        body: Main analysis text
        link: Source URL, "SEARCH_QUERY:..." fallback, or "#"
        lineage: Historical context
        future_speak: Forward-looking prediction
    """

    id: str = ""
    category_code: str = Field(default="", alias="categoryCode")
    category_name: str = Field(default="", alias="categoryName")
    focus_sentence: str = Field(default="", alias="focusSentence")
    body: str = ""
    link: str = ""
    lineage: str | None = None
    future_speak: str | None = Field(default=None, alias="futureSpeak")

    model_config = {"extra": "ignore", "populate_by_name": True}


class DailyIssue(BaseModel):
    """One dated, themed editorial issue.

    Two issues are the same logical record iff ``(date, theme)`` match
    exactly; see ``key``.

    Attributes:
        date: Display-formatted date (e.g. "Tuesday, January 2, 2024")
        theme: Issue title
        theme_sub: Subtitle
        intro: Four-part intro matrix
        articles: Ordered articles, six expected but not enforced
        final_prompt: Closing prompt text
    """

    date: str
    theme: str
    theme_sub: str = Field(default="", alias="themeSub")
    intro: FourfoldIntro = Field(default_factory=FourfoldIntro)
    articles: list[Article] = []
    final_prompt: str = Field(default="", alias="finalPrompt")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("articles", "intro", mode="before")
    @classmethod
    def _default_missing(cls, value, info):
        if value is None:
            return [] if info.field_name == "articles" else {}
        return value

    @property
    def key(self) -> tuple[str, str]:
        """Composite identity used for deduplication."""
        return (self.date, self.theme)

    def to_wire(self) -> dict:
        """Serialize to the camelCase document shape."""
        return self.model_dump(by_alias=True, mode="json")


GenerationStatus = Literal["idle", "generating", "success", "error"]
