"""Local archive of daily issues.

The archive is the read model for display and search. It is keyed by the
composite ``(date, theme)`` identity, capped at a fixed number of records,
and persisted to an injected single-slot storage backend on every save.
"""

import json
import logging
import threading

from pydantic import ValidationError as PydanticValidationError

from schemas.issue import DailyIssue, FourfoldIntro

from .dates import sort_by_date_desc
from .storage import ArchiveStorage

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50

SEED_ISSUES = [
    DailyIssue(
        date="Saturday, April 12, 2025",
        theme="Digital Brutalism",
        theme_sub="數位粗獷主義",
        intro=FourfoldIntro(
            keywords="Raw Data, Concrete, Glitch, Permanence",
            intersection="Where the weight of concrete meets the weightlessness of code.",
            vector="Towards a heavy, tactile internet.",
            reflection="Can a website age like a concrete bunker?",
        ),
        articles=[],
        final_prompt="Is the server farm the new cathedral?",
    )
]


class ArchiveStore:
    """Persistent, capacity-bounded collection of issues.

    Merge rules for ``save``:
    - a new ``(date, theme)`` key is inserted at the front;
    - an existing key is replaced only when the incoming issue has at least
      as many articles as the stored one;
    - the collection is then truncated to ``capacity`` entries in storage
      order.

    Reads are always re-sorted by parsed date, most recent first. Storage and
    serialization failures are logged and never raised.

    Example:
        store = ArchiveStore(JsonFileStorage(Path("./workspace/archive.json")))
        store.save(issue)
        results = store.search("concrete")
    """

    def __init__(
        self,
        storage: ArchiveStorage,
        capacity: int = DEFAULT_CAPACITY,
        seed: list[DailyIssue] | None = None,
    ):
        """Load the archive from storage, seeding it if empty.

        Args:
            storage: Backend holding the serialized collection
            capacity: Maximum number of stored issues (default: 50)
            seed: Issues placed in an empty archive (default: SEED_ISSUES);
                  pass an empty list to disable seeding
        """
        self.storage = storage
        self.capacity = capacity
        self._lock = threading.RLock()
        self._issues = self._load()

        seed_issues = SEED_ISSUES if seed is None else seed
        if not self._issues and seed_issues:
            self._issues = [issue.model_copy(deep=True) for issue in seed_issues]
            self._persist()

    def __len__(self) -> int:
        return len(self._issues)

    def save(self, issue: DailyIssue) -> bool:
        """Upsert an issue by its ``(date, theme)`` key and persist.

        Args:
            issue: The issue to store

        Returns:
            True if the collection was persisted, False if persisting failed
        """
        with self._lock:
            index = self._find(issue.key)
            if index is None:
                self._issues.insert(0, issue.model_copy(deep=True))
            else:
                existing = self._issues[index]
                if len(issue.articles) >= len(existing.articles):
                    self._issues[index] = issue.model_copy(deep=True)
                else:
                    logger.debug(
                        f"Kept stored {issue.date} / {issue.theme}: "
                        f"{len(existing.articles)} articles > {len(issue.articles)}"
                    )

            del self._issues[self.capacity :]
            return self._persist()

    def get_all(self) -> list[DailyIssue]:
        """Return copies of all issues, most recent date first."""
        with self._lock:
            snapshot = [issue.model_copy(deep=True) for issue in self._issues]
        return sort_by_date_desc(snapshot)

    def get(self, date: str, theme: str) -> DailyIssue | None:
        """Return a copy of the issue stored under ``(date, theme)``, if any."""
        with self._lock:
            index = self._find((date, theme))
            return None if index is None else self._issues[index].model_copy(deep=True)

    def latest(self) -> DailyIssue | None:
        """Return the most recent issue, if any."""
        issues = self.get_all()
        return issues[0] if issues else None

    def search(self, query: str) -> list[DailyIssue]:
        """Case-insensitive substring search across issue and article text.

        A blank query returns every issue.
        """
        issues = self.get_all()
        needle = (query or "").strip().lower()
        if not needle:
            return issues
        return [issue for issue in issues if _matches(issue, needle)]

    def _find(self, key: tuple[str, str]) -> int | None:
        for index, stored in enumerate(self._issues):
            if stored.key == key:
                return index
        return None

    def _load(self) -> list[DailyIssue]:
        """Read and validate the stored collection.

        Unreadable storage or malformed JSON yields an empty collection;
        individual invalid records are skipped.
        """
        try:
            text = self.storage.load()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read archive from {self.storage!r}: {e}")
            return []

        if not text:
            return []

        try:
            data = json.loads(text)
        except ValueError as e:
            logger.warning(f"Archive is not valid JSON, starting empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning("Archive is not a JSON array, starting empty")
            return []

        issues: list[DailyIssue] = []
        for i, record in enumerate(data):
            try:
                issues.append(DailyIssue.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(
                    f"Skipping archive record {i}: {e.error_count()} validation errors"
                )
        return issues

    def _persist(self) -> bool:
        try:
            text = json.dumps(
                [issue.to_wire() for issue in self._issues], ensure_ascii=False
            )
            self.storage.save(text)
        except Exception as e:
            logger.error(f"Failed to save archive: {e}")
            return False
        return True


def _matches(issue: DailyIssue, needle: str) -> bool:
    fields = [
        issue.date,
        issue.theme,
        issue.theme_sub,
        issue.final_prompt,
        issue.intro.keywords,
        issue.intro.intersection,
        issue.intro.vector,
        issue.intro.reflection,
    ]
    for article in issue.articles:
        fields.extend(
            [
                article.focus_sentence,
                article.body,
                article.category_name,
                article.lineage,
                article.future_speak,
            ]
        )
    return any(value and needle in value.lower() for value in fields)
