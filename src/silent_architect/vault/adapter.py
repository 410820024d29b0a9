"""Remote Vault adapter.

Converts between canonical DailyIssue documents and the Vault's flattened
rows. The Vault stores one row per article with the issue-level fields
repeated on every row, and its column names drift ("Theme Sub",
"theme_sub", "ThemeSub"), so columns are resolved by normalized name
rather than looked up literally.
"""

import hashlib
import logging
import re
import secrets
import string
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from schemas.issue import Article, DailyIssue, FourfoldIntro
from schemas.vault import VaultPayload
from silent_architect.archive.dates import (
    format_long_date,
    parse_display_date,
    sort_by_date_desc,
)
from silent_architect.clients import ClientError, VaultClient

from .outcome import VaultOutcome

logger = logging.getLogger(__name__)

# Logical Vault column names
DATE = "Date"
THEME = "Theme"
THEME_SUB = "Theme Sub"
KEYWORDS = "Keywords"
INTERSECTION = "02 / Intersection"
INTRO_VECTOR = "03 / Future Vector"
REFLECTION = "04 / Reflection"
FINAL_PROMPT = "Chapter 09 / The Final Prompt"
FOCUS_SENTENCE = "Focus Sentence"
CATEGORY = "Category"
BODY = "Body"
LINK = "Link"
LINEAGE = "Lineage"
FUTURE_VECTOR = "Future Vector"

DEFAULT_THEME = "Untitled"
DEFAULT_CATEGORY_CODE = "XX"
DEFAULT_CATEGORY_NAME = "Uncategorized"
DEFAULT_LINK = "#"

PUSH_SUCCESS_MESSAGE = "Sync.Success: Data Pushed"
PUSH_FAILURE_MESSAGE = "Sync.Error: Connection Failed"

ARTICLE_ID_LENGTH = 9
_ID_ALPHABET = string.ascii_lowercase + string.digits
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_field_name(name: str) -> str:
    """Lowercase a column name and strip every non-alphanumeric character."""
    return _NON_ALNUM.sub("", str(name).lower())


def resolve_field(row: Any, name: str) -> Any:
    """Look up a logical field in a Vault row by normalized column name.

    If several columns normalize to the same key, the first one in the
    row's own key order wins.

    Args:
        row: A Vault row; anything other than a mapping resolves to ""
        name: The logical field name (e.g. "Theme Sub")

    Returns:
        The raw cell value, or "" if no column matches
    """
    if not isinstance(row, Mapping):
        return ""

    wanted = normalize_field_name(name)
    for key in row:
        if normalize_field_name(key) == wanted:
            return row[key]
    return ""


def format_vault_date(raw: Any) -> str:
    """Normalize a raw Vault date into "Tuesday, January 2, 2024" form.

    Returns:
        The long-form date, or "" if the value is empty or unparseable
    """
    parsed = parse_display_date(raw)
    if parsed is None:
        return ""
    return format_long_date(parsed)


def new_article_id() -> str:
    """Generate a random article id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ARTICLE_ID_LENGTH))


def stable_article_id(date: str, theme: str, focus_sentence: str) -> str:
    """Derive an article id that is identical across repeated pulls."""
    digest = hashlib.sha1(f"{date}|{theme}|{focus_sentence}".encode("utf-8"))
    return digest.hexdigest()[:ARTICLE_ID_LENGTH]


def rows_to_issues(rows: Iterable[Any], stable_ids: bool = False) -> list[DailyIssue]:
    """Rebuild issues from flattened Vault rows.

    Rows are grouped by ``(normalized date, theme)``. The first row of a
    group seeds the issue-level fields; every row with a focus sentence not
    already present in its group contributes one article. Rows with an
    empty or unparseable date are dropped.

    Args:
        rows: Raw Vault rows
        stable_ids: Derive article ids from content instead of randomly

    Returns:
        Reconstructed issues, most recent date first
    """
    groups: dict[tuple[str, str], DailyIssue] = {}
    seen_focus: dict[tuple[str, str], set[str]] = {}
    dropped = 0

    for row in rows:
        date = format_vault_date(resolve_field(row, DATE))
        if not date:
            dropped += 1
            continue

        theme = _text(resolve_field(row, THEME), DEFAULT_THEME)
        key = (date, theme)

        issue = groups.get(key)
        if issue is None:
            issue = DailyIssue(
                date=date,
                theme=theme,
                theme_sub=_text(resolve_field(row, THEME_SUB)),
                intro=FourfoldIntro(
                    keywords=_text(resolve_field(row, KEYWORDS)),
                    intersection=_text(resolve_field(row, INTERSECTION)),
                    vector=_text(resolve_field(row, INTRO_VECTOR)),
                    reflection=_text(resolve_field(row, REFLECTION)),
                ),
                articles=[],
                final_prompt=_text(resolve_field(row, FINAL_PROMPT)),
            )
            groups[key] = issue
            seen_focus[key] = set()

        focus_sentence = _text(resolve_field(row, FOCUS_SENTENCE))
        if not focus_sentence or focus_sentence in seen_focus[key]:
            continue

        seen_focus[key].add(focus_sentence)
        article_id = (
            stable_article_id(date, theme, focus_sentence)
            if stable_ids
            else new_article_id()
        )
        issue.articles.append(
            Article(
                id=article_id,
                category_code=DEFAULT_CATEGORY_CODE,
                category_name=_text(resolve_field(row, CATEGORY), DEFAULT_CATEGORY_NAME),
                focus_sentence=focus_sentence,
                body=_text(resolve_field(row, BODY)),
                link=_text(resolve_field(row, LINK), DEFAULT_LINK),
                lineage=_text(resolve_field(row, LINEAGE)),
                future_speak=_text(resolve_field(row, FUTURE_VECTOR)),
            )
        )

    if dropped:
        logger.debug(f"Dropped {dropped} rows without a usable date")

    return sort_by_date_desc(groups.values())


def _text(value: Any, default: str = "") -> str:
    """Render a loosely-typed cell value as text, using default when empty."""
    if not value:
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


class VaultAdapter:
    """Pushes issues to and rebuilds issues from the remote Vault.

    The adapter holds no state of its own beyond its client. Neither
    operation raises: pushes report a failure flag, pulls fail closed to an
    empty result.

    Example:
        with VaultClient({"base_url": vault_url}) as client:
            adapter = VaultAdapter(client)
            issues = adapter.pull()
    """

    def __init__(self, client: VaultClient, stable_ids: bool = False):
        """Initialize the adapter.

        Args:
            client: Client for the Vault endpoint
            stable_ids: Derive article ids from content instead of randomly
        """
        self.client = client
        self.stable_ids = stable_ids

    def push(self, issues: list[DailyIssue]) -> VaultOutcome:
        """Submit issues to the Vault without waiting for confirmation.

        Success means the request was dispatched; the endpoint's answer is
        not inspected.
        """
        payload = VaultPayload(issues=issues)
        try:
            self.client.push(payload)
        except (ClientError, httpx.HTTPError) as e:
            logger.error(f"Cloud sync failed: {e}")
            return VaultOutcome(
                success=False, message=PUSH_FAILURE_MESSAGE, reason=str(e)
            )

        logger.info(f"Pushed {len(issues)} issues to the Vault")
        return VaultOutcome(success=True, message=PUSH_SUCCESS_MESSAGE)

    def pull(self) -> list[DailyIssue]:
        """Fetch and rebuild every issue in the Vault.

        Returns:
            Issues sorted most recent first, or [] if the fetch failed
        """
        return self.pull_outcome().issues

    def pull_outcome(self) -> VaultOutcome:
        """Fetch and rebuild every issue, reporting whether the fetch worked."""
        logger.info("Fetching data from the Vault")
        try:
            rows = self.client.fetch()
        except (ClientError, httpx.HTTPError) as e:
            logger.error(f"Vault retrieval failed: {e}")
            return VaultOutcome(
                success=False, message="Vault retrieval failed", reason=str(e)
            )

        logger.info(f"Received {len(rows)} rows from the Vault")
        try:
            issues = rows_to_issues(rows, stable_ids=self.stable_ids)
        except Exception as e:
            logger.error(f"Vault reconstruction failed: {e}")
            return VaultOutcome(
                success=False, message="Vault reconstruction failed", reason=str(e)
            )

        logger.info(f"Reconstructed {len(issues)} issues from the Vault")
        return VaultOutcome(
            success=True,
            message=f"Reconstructed {len(issues)} issues",
            issues=issues,
        )
