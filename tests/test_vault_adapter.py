"""Tests for the Vault adapter."""

import json
import re
from unittest.mock import MagicMock, patch

import httpx
import pytest

from schemas.vault import VaultPayload
from silent_architect.clients import ConnectionError, ValidationError
from silent_architect.vault import VaultAdapter
from silent_architect.vault.adapter import (
    PUSH_FAILURE_MESSAGE,
    PUSH_SUCCESS_MESSAGE,
    format_vault_date,
    new_article_id,
    normalize_field_name,
    resolve_field,
    rows_to_issues,
    stable_article_id,
)


@pytest.fixture
def mock_vault_client(vault_rows):
    """Mock VaultClient returning the sample rows."""
    client = MagicMock()
    client.fetch.return_value = vault_rows
    return client


class TestNormalizeFieldName:
    """Tests for normalize_field_name."""

    @pytest.mark.parametrize("name", ["Theme Sub", "theme_sub", "ThemeSub", "THEME-SUB"])
    def test_variants_normalize_equal(self, name):
        """Spelling variants of a column normalize to the same key."""
        assert normalize_field_name(name) == "themesub"

    def test_numbered_columns(self):
        """Numbered intro columns keep their digits."""
        assert normalize_field_name("03 / Future Vector") == "03futurevector"
        assert normalize_field_name("Future Vector") == "futurevector"


class TestResolveField:
    """Tests for resolve_field."""

    @pytest.mark.parametrize("column", ["Theme Sub", "theme_sub", "ThemeSub", "theme sub"])
    def test_resolves_any_spelling(self, column):
        """A logical field resolves whatever spelling the row uses."""
        assert resolve_field({column: "Glass"}, "Theme Sub") == "Glass"

    def test_first_matching_column_wins(self):
        """When several columns match, the first one in the row wins."""
        row = {"Theme Sub": "first", "theme_sub": "second"}

        assert resolve_field(row, "Theme Sub") == "first"

    def test_missing_field(self):
        """A missing field resolves to an empty string."""
        assert resolve_field({"Theme": "Y"}, "Lineage") == ""

    @pytest.mark.parametrize("row", [None, "row", 3, ["Theme"]])
    def test_non_mapping_row(self, row):
        """Rows that are not objects resolve to an empty string."""
        assert resolve_field(row, "Theme") == ""


class TestFormatVaultDate:
    """Tests for format_vault_date."""

    @pytest.mark.parametrize(
        "raw",
        [
            "2024-01-02",
            "Tuesday, Jan 2, 2024",
            "Tuesday, January 2, 2024",
            "January 2, 2024",
        ],
    )
    def test_normalizes_to_long_form(self, raw):
        """Different date spellings normalize to one long form."""
        assert format_vault_date(raw) == "Tuesday, January 2, 2024"

    @pytest.mark.parametrize(
        "raw",
        ["", None, "not a date", "10:30", "May", "3rd", "9999-12-31T23:00:00-05:00"],
    )
    def test_unusable_dates(self, raw):
        """Empty and unparseable dates format as an empty string."""
        assert format_vault_date(raw) == ""


class TestArticleIds:
    """Tests for article id generation."""

    def test_random_id_shape(self):
        """Random ids are nine lowercase alphanumeric characters."""
        assert re.fullmatch(r"[a-z0-9]{9}", new_article_id())

    def test_stable_id_is_deterministic(self):
        """Stable ids depend only on date, theme and focus sentence."""
        first = stable_article_id("Tuesday, January 2, 2024", "Y", "A")
        second = stable_article_id("Tuesday, January 2, 2024", "Y", "A")

        assert first == second
        assert len(first) == 9
        assert first != stable_article_id("Tuesday, January 2, 2024", "Y", "B")


class TestRowsToIssues:
    """Tests for rebuilding issues from Vault rows."""

    def test_groups_rows_into_one_issue(self, vault_rows):
        """Rows sharing date and theme form one issue."""
        issues = rows_to_issues(vault_rows)

        assert len(issues) == 1
        issue = issues[0]
        assert issue.date == "Tuesday, January 2, 2024"
        assert issue.theme == "Y"
        assert issue.theme_sub == "Y sub"
        assert issue.intro.keywords == "Glass, Light"
        assert issue.intro.intersection == "Where light meets glass."
        assert issue.intro.vector == "Towards transparent cities."
        assert issue.intro.reflection == "Is transparency honest?"
        assert issue.final_prompt == "What does glass hide?"
        assert [a.focus_sentence for a in issue.articles] == ["A", "B"]

    def test_article_fields(self, vault_rows):
        """Article fields come from the row, with defaults for blanks."""
        first, second = rows_to_issues(vault_rows)[0].articles

        assert first.category_code == "XX"
        assert first.category_name == "Spatial Syntax & Phenomenology"
        assert first.body == "Body A"
        assert first.link == "https://example.com/a"
        assert first.lineage == "Since 1851."
        assert first.future_speak == "Until 2050."
        assert second.link == "#"
        assert second.lineage == ""
        assert second.future_speak == ""

    def test_intro_vector_and_article_vector_are_separate(self, vault_rows):
        """The numbered intro column does not leak into article vectors."""
        issue = rows_to_issues(vault_rows)[0]

        assert issue.intro.vector != issue.articles[0].future_speak

    def test_dedup_and_grouping_across_dates(self):
        """Duplicate focus sentences collapse; different dates split issues."""
        rows = [
            {"Date": "Tuesday, Jan 2, 2024", "Theme": "Y", "Focus Sentence": "A"},
            {"Date": "Tuesday, Jan 2, 2024", "Theme": "Y", "Focus Sentence": "A"},
            {"Date": "Wednesday, Jan 3, 2024", "Theme": "Z", "Focus Sentence": "B"},
        ]

        issues = rows_to_issues(rows)

        assert [(i.date, i.theme) for i in issues] == [
            ("Wednesday, January 3, 2024", "Z"),
            ("Tuesday, January 2, 2024", "Y"),
        ]
        assert [len(i.articles) for i in issues] == [1, 1]

    def test_date_spellings_merge(self):
        """Rows with differently spelled but equal dates share an issue."""
        rows = [
            {"Date": "2024-01-02", "Theme": "Y", "Focus Sentence": "A"},
            {"Date": "Tuesday, January 2, 2024", "Theme": "Y", "Focus Sentence": "B"},
        ]

        issues = rows_to_issues(rows)

        assert len(issues) == 1
        assert len(issues[0].articles) == 2

    def test_rows_without_usable_date_dropped(self):
        """Rows with empty or unparseable dates are dropped."""
        rows = [
            {"Date": "", "Theme": "Y", "Focus Sentence": "A"},
            {"Date": "someday", "Theme": "Y", "Focus Sentence": "B"},
            {"Theme": "Y", "Focus Sentence": "C"},
        ]

        assert rows_to_issues(rows) == []

    def test_missing_theme_defaults(self):
        """A blank theme becomes "Untitled"."""
        issues = rows_to_issues([{"Date": "2024-01-02", "Focus Sentence": "A"}])

        assert issues[0].theme == "Untitled"

    def test_missing_category_defaults(self):
        """A blank category becomes "Uncategorized"."""
        issues = rows_to_issues([{"Date": "2024-01-02", "Theme": "Y", "Focus Sentence": "A"}])

        assert issues[0].articles[0].category_name == "Uncategorized"

    def test_row_without_focus_sentence_seeds_issue_only(self):
        """A row with no focus sentence contributes issue fields but no article."""
        issues = rows_to_issues([{"Date": "2024-01-02", "Theme": "Y", "Theme Sub": "S"}])

        assert issues[0].theme_sub == "S"
        assert issues[0].articles == []

    def test_numeric_cells_rendered_as_text(self):
        """Numeric cells from the spreadsheet become text."""
        issues = rows_to_issues([{"Date": "2024-01-02", "Theme": 2024.0, "Focus Sentence": 7}])

        assert issues[0].theme == "2024"
        assert issues[0].articles[0].focus_sentence == "7"

    def test_non_mapping_rows_ignored(self):
        """Rows that are not objects have no date and are dropped."""
        assert rows_to_issues(["junk", None]) == []

    def test_stable_ids_repeat_across_pulls(self, vault_rows):
        """With stable ids, two rebuilds yield identical article ids."""
        first = rows_to_issues(vault_rows, stable_ids=True)
        second = rows_to_issues(vault_rows, stable_ids=True)

        assert [a.id for a in first[0].articles] == [a.id for a in second[0].articles]

    def test_random_ids_by_default(self, vault_rows):
        """Without stable ids, every article gets a fresh random id."""
        ids = [a.id for a in rows_to_issues(vault_rows)[0].articles]

        assert all(re.fullmatch(r"[a-z0-9]{9}", i) for i in ids)


class TestVaultAdapterPull:
    """Tests for VaultAdapter.pull."""

    def test_pull_drops_out_of_range_dates(self, mock_vault_client, vault_rows):
        """Rows whose date overflows on conversion are dropped, not raised."""
        mock_vault_client.fetch.return_value = [
            {"Date": "9999-12-31T23:00:00-05:00", "Theme": "X", "Focus Sentence": "A"},
            *vault_rows,
        ]

        issues = VaultAdapter(mock_vault_client).pull()

        assert [i.theme for i in issues] == ["Y"]

    @patch("silent_architect.vault.adapter.rows_to_issues")
    def test_pull_reconstruction_failure(
        self, mock_rows_to_issues, mock_vault_client, caplog
    ):
        """A failure while rebuilding issues yields an empty, failed outcome."""
        mock_rows_to_issues.side_effect = OverflowError("date value out of range")
        adapter = VaultAdapter(mock_vault_client)

        outcome = adapter.pull_outcome()

        assert outcome.success is False
        assert outcome.issues == []
        assert outcome.reason == "date value out of range"
        assert adapter.pull() == []
        assert "Vault reconstruction failed" in caplog.text

    def test_pull_rebuilds_issues(self, mock_vault_client):
        """pull returns reconstructed issues."""
        issues = VaultAdapter(mock_vault_client).pull()

        assert len(issues) == 1
        mock_vault_client.fetch.assert_called_once()

    def test_pull_empty_vault(self, mock_vault_client):
        """An empty Vault pulls as an empty list."""
        mock_vault_client.fetch.return_value = []

        outcome = VaultAdapter(mock_vault_client).pull_outcome()

        assert outcome.success is True
        assert outcome.issues == []

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionError("Connection failed after 3 attempts"),
            ValidationError("Vault response is not valid JSON"),
            httpx.ReadError("reset"),
        ],
    )
    def test_pull_fails_closed(self, mock_vault_client, error, caplog):
        """Transport and decoding failures yield an empty result."""
        mock_vault_client.fetch.side_effect = error
        adapter = VaultAdapter(mock_vault_client)

        assert adapter.pull() == []
        outcome = adapter.pull_outcome()
        assert outcome.success is False
        assert outcome.reason
        assert "Vault retrieval failed" in caplog.text


class TestVaultAdapterPush:
    """Tests for VaultAdapter.push."""

    def test_push_sends_payload(self, mock_vault_client, sample_issue):
        """push hands the client a timestamped payload of the issues."""
        outcome = VaultAdapter(mock_vault_client).push([sample_issue])

        assert outcome.success is True
        assert outcome.message == PUSH_SUCCESS_MESSAGE
        payload = mock_vault_client.push.call_args[0][0]
        assert isinstance(payload, VaultPayload)
        assert payload.issues == [sample_issue]

    def test_push_payload_wire_shape(self, mock_vault_client, sample_issue):
        """The pushed payload serializes with timestamp and camelCase issues."""
        VaultAdapter(mock_vault_client).push([sample_issue])

        data = json.loads(mock_vault_client.push.call_args[0][0].to_json())
        assert data["timestamp"].endswith("Z")
        assert data["issues"][0]["finalPrompt"] == "What does a street remember?"

    def test_push_empty_list(self, mock_vault_client):
        """Pushing nothing still dispatches a payload."""
        outcome = VaultAdapter(mock_vault_client).push([])

        assert outcome.success is True
        mock_vault_client.push.assert_called_once()

    @pytest.mark.parametrize(
        "error",
        [ConnectionError("Connection failed after 3 attempts"), httpx.ConnectError("refused")],
    )
    def test_push_failure(self, mock_vault_client, sample_issue, error, caplog):
        """A transport failure is reported, not raised."""
        mock_vault_client.push.side_effect = error

        outcome = VaultAdapter(mock_vault_client).push([sample_issue])

        assert outcome.success is False
        assert outcome.message == PUSH_FAILURE_MESSAGE
        assert "Cloud sync failed" in caplog.text
