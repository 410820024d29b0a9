"""Curator chat over the local archive."""

import logging

from google import genai
from google.genai import types

from schemas.chat import ChatMessage
from schemas.issue import DailyIssue

from .generator import DEFAULT_MODEL
from .prompts import (
    CURATOR_EMPTY_REPLY,
    CURATOR_ERROR_REPLY,
    CURATOR_GREETING,
    CURATOR_INSTRUCTION,
    EMPTY_VAULT_TEXT,
)

logger = logging.getLogger(__name__)

DEFAULT_CHAT_TEMPERATURE = 0.6


def build_vault_context(issues: list[DailyIssue]) -> str:
    """Render the archive as a plain-text knowledge base for the curator."""
    if not issues:
        return EMPTY_VAULT_TEXT

    blocks = []
    for issue in issues:
        fragments = "\n".join(
            f"[{i}] {article.category_name}: {article.focus_sentence}\n"
            f"Analysis: {article.body}"
            for i, article in enumerate(issue.articles, 1)
        )
        blocks.append(
            f"--- DOCUMENT: {issue.date} ---\n"
            f"THEME: {issue.theme} ({issue.theme_sub})\n"
            f"INTRO MATRIX:\n"
            f"- Keywords: {issue.intro.keywords}\n"
            f"- Intersection: {issue.intro.intersection}\n"
            f"- Future Vector: {issue.intro.vector}\n"
            f"- Reflection: {issue.intro.reflection}\n"
            f"\n"
            f"FRAGMENTS:\n"
            f"{fragments}\n"
            f"---------------------------"
        )
    return "\n\n".join(blocks)


class CuratorChat:
    """A chat session grounded in the archive's issues.

    The transcript records every user turn and model reply. Failed or empty
    replies are recorded as fixed fallback messages rather than raised.

    Example:
        chat = CuratorChat(store.get_all(), client=genai.Client(api_key=key))
        chat.start()
        reply = chat.send("Which issues discuss concrete?")
    """

    def __init__(
        self,
        issues: list[DailyIssue],
        client: genai.Client | None = None,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_CHAT_TEMPERATURE,
    ):
        self.issues = issues
        self.model = model
        self.temperature = temperature
        self.transcript: list[ChatMessage] = []
        self._api_key = api_key
        self._client = client
        self._session = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    @property
    def system_instruction(self) -> str:
        return CURATOR_INSTRUCTION.format(vault=build_vault_context(self.issues))

    def start(self) -> ChatMessage:
        """Open the chat session and record the greeting."""
        self._session = self.client.chats.create(
            model=self.model,
            config=types.GenerateContentConfig(
                system_instruction=self.system_instruction,
                temperature=self.temperature,
            ),
        )
        greeting = ChatMessage(role="model", text=CURATOR_GREETING)
        self.transcript = [greeting]
        logger.debug(f"Curator chat started over {len(self.issues)} issues")
        return greeting

    def send(self, text: str) -> ChatMessage | None:
        """Send a user message and record the reply.

        Returns:
            The model's reply, or None if the message was blank
        """
        if not text or not text.strip():
            return None
        if self._session is None:
            self.start()

        self.transcript.append(ChatMessage(role="user", text=text))
        try:
            response = self._session.send_message(text)
            reply = ChatMessage(role="model", text=response.text or CURATOR_EMPTY_REPLY)
        except Exception as e:
            logger.error(f"Curator chat failed: {e}")
            reply = ChatMessage(role="model", text=CURATOR_ERROR_REPLY)

        self.transcript.append(reply)
        return reply
