"""Curator chat transcript schemas."""

from typing import Literal

from pydantic import BaseModel


class ChatMessage(BaseModel):
    """A single turn in a curator chat transcript."""

    role: Literal["user", "model"]
    text: str
