"""Airtable client for the article-level knowledge base."""

import logging
from typing import Any

from schemas.issue import DailyIssue

from .client import Client
from .exceptions import ClientError, ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_AIRTABLE_BASE_URL = "https://api.airtable.com/v0"
DEFAULT_TABLE_NAME = "KnowledgeBase"


class AirtableClient(Client):
    """Client that stores issues in Airtable, one record per article.

    Each article becomes a self-contained knowledge chunk with the
    issue-level context (date, theme, keywords) attached, which suits
    retrieval-augmented lookups better than one record per issue.

    Config keys (in addition to the base Client keys):
        api_key: Airtable personal access token
        base_id: Airtable base identifier
        table_name: Table to write to (default: "KnowledgeBase")

    Example:
        config = {
            "base_url": "https://api.airtable.com/v0",
            "api_key": "pat...",
            "base_id": "app...",
        }
        with AirtableClient(config) as client:
            client.save_issue(issue)
    """

    BATCH_SIZE = 10

    @property
    def api_key(self) -> str:
        return str(self._config.get("api_key") or "")

    @property
    def base_id(self) -> str:
        return str(self._config.get("base_id") or "")

    @property
    def table_name(self) -> str:
        return str(self._config.get("table_name") or DEFAULT_TABLE_NAME)

    @property
    def headers(self) -> dict[str, str]:
        headers = super().headers
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def fetch(self, **params) -> list[dict[str, Any]]:
        """List records from the configured table.

        Raises:
            ConfigurationError: If api_key or base_id is missing
        """
        self._check_configuration()
        response = self.get(self._table_path(), params=params)
        return response.json().get("records", [])

    def save_issue(self, issue: DailyIssue) -> bool:
        """Store every article of an issue as an Airtable record.

        Args:
            issue: The issue to store

        Returns:
            True if all batches were accepted, False otherwise
        """
        try:
            self._check_configuration()
        except ConfigurationError as e:
            logger.error(f"Airtable configuration missing: {e}")
            return False

        records = build_records(issue)
        for start in range(0, len(records), self.BATCH_SIZE):
            batch = records[start : start + self.BATCH_SIZE]
            try:
                self.post(self._table_path(), json={"records": batch})
            except ClientError as e:
                logger.error(f"Failed to save {issue.date} to Airtable: {e}")
                return False

        logger.info(f"Saved {len(records)} records for {issue.date} to Airtable")
        return True

    def _table_path(self) -> str:
        return f"/{self.base_id}/{self.table_name}"

    def _check_configuration(self) -> None:
        if not self.api_key or not self.base_id:
            raise ConfigurationError("api_key and base_id are required")


def build_records(issue: DailyIssue) -> list[dict[str, Any]]:
    """Flatten an issue into Airtable records, one per article."""
    return [
        {
            "fields": {
                "Date": issue.date,
                "Category": article.category_name,
                "FocusSentence": article.focus_sentence,
                "Body": article.body,
                "Link": article.link,
                "Keywords": issue.intro.keywords,
                "Theme": issue.theme,
                "ThemeSub": issue.theme_sub,
                "FutureSpeak": article.future_speak or "",
                "Lineage": article.lineage or "",
            }
        }
        for article in issue.articles
    ]
