"""Issue generator backed by the Gemini API."""

import logging
import re
from datetime import date, timedelta

from google import genai
from google.genai import types
from pydantic import ValidationError as PydanticValidationError

from schemas.issue import DailyIssue

from .prompts import build_search_prompt, build_system_instruction

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_SEARCH_WINDOW_DAYS = 2

_CODE_FENCE_START = re.compile(r"^\s*```(?:json)?\s*")
_CODE_FENCE_END = re.compile(r"\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around a JSON reply."""
    return _CODE_FENCE_END.sub("", _CODE_FENCE_START.sub("", text))


class IssueGenerator:
    """Generates a new DailyIssue with a search-grounded Gemini call.

    Config keys:
        api_key: Gemini API key; without it ``generate`` returns None
        model: Model name (default: "gemini-3-flash-preview")
        temperature: Sampling temperature (default: 0.3)
        search_window_days: How many days back to search (default: 2)

    Example:
        generator = IssueGenerator({"api_key": os.environ["GEMINI_API_KEY"]})
        issue = generator.generate()
    """

    def __init__(self, config: dict, client: genai.Client | None = None):
        """Initialize the generator.

        Args:
            config: Generator configuration
            client: Optional Gemini client for dependency injection
        """
        self._config = config
        self._client = client

    @property
    def api_key(self) -> str:
        return str(self._config.get("api_key") or "")

    @property
    def model(self) -> str:
        return str(self._config.get("model") or DEFAULT_MODEL)

    @property
    def temperature(self) -> float:
        return float(self._config.get("temperature", DEFAULT_TEMPERATURE))

    @property
    def search_window_days(self) -> int:
        return int(self._config.get("search_window_days", DEFAULT_SEARCH_WINDOW_DAYS))

    @property
    def client(self) -> genai.Client:
        """Lazy-initialized Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, today: date | None = None) -> DailyIssue | None:
        """Ask the model for a new issue.

        Args:
            today: Reference date for the search window (default: today)

        Returns:
            The generated issue, or None if no key is configured, the call
            fails, or the reply is not a valid issue document
        """
        if self._client is None and not self.api_key:
            logger.error("No Gemini API key configured")
            return None

        search_after = (today or date.today()) - timedelta(days=self.search_window_days)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=build_search_prompt(search_after),
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                    system_instruction=build_system_instruction(),
                    temperature=self.temperature,
                ),
            )
        except Exception as e:
            logger.error(f"Generation failed: {e}")
            return None

        return self.parse_response(response.text or "")

    def parse_response(self, text: str) -> DailyIssue | None:
        """Parse a model reply into an issue, or None if it is malformed."""
        try:
            issue = DailyIssue.model_validate_json(strip_code_fences(text))
        except PydanticValidationError as e:
            logger.error(f"Generated issue is malformed: {e.error_count()} errors")
            return None

        if len(issue.articles) != 6:
            logger.warning(f"Generated issue has {len(issue.articles)} articles")
        logger.info(f"Generated issue {issue.date} / {issue.theme}")
        return issue
