"""Schema definitions for The Silent Architect."""

from .chat import ChatMessage
from .issue import Article, DailyIssue, FourfoldIntro, GenerationStatus
from .rag import RagChunk
from .vault import VaultPayload

__all__ = [
    "Article",
    "ChatMessage",
    "DailyIssue",
    "FourfoldIntro",
    "GenerationStatus",
    "RagChunk",
    "VaultPayload",
]
