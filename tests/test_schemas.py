"""Tests for schema definitions."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from schemas import Article, ChatMessage, DailyIssue, FourfoldIntro, RagChunk, VaultPayload


class TestArticle:
    """Tests for the Article model."""

    def test_accepts_camel_case_aliases(self, article_factory):
        """Article accepts wire-format camelCase keys."""
        article = Article.model_validate(article_factory("Glass remembers light."))

        assert article.focus_sentence == "Glass remembers light."
        assert article.category_code == "04"
        assert article.future_speak == "Shaping cities until 2040."

    def test_accepts_snake_case_names(self):
        """Article accepts attribute names on input."""
        article = Article(id="abc", focus_sentence="Steel bends.", category_name="Materials")

        assert article.focus_sentence == "Steel bends."
        assert article.category_name == "Materials"

    def test_optional_fields_default_to_none(self):
        """Lineage and futureSpeak are optional."""
        article = Article(focus_sentence="Steel bends.")

        assert article.lineage is None
        assert article.future_speak is None

    def test_ignores_unknown_keys(self, article_factory):
        """Unknown keys are ignored rather than rejected."""
        article = Article.model_validate(article_factory("A", extra="x"))

        assert not hasattr(article, "extra")


class TestDailyIssue:
    """Tests for the DailyIssue model."""

    def test_from_wire_record(self, sample_issue_record):
        """DailyIssue parses a wire-format document."""
        issue = DailyIssue.model_validate(sample_issue_record)

        assert issue.date == "Monday, January 1, 2024"
        assert issue.theme_sub == "柔性基礎設施"
        assert issue.intro.intersection == "Where textiles meet transit."
        assert len(issue.articles) == 2
        assert issue.final_prompt == "What does a street remember?"

    def test_requires_date_and_theme(self):
        """DailyIssue rejects documents without date or theme."""
        with pytest.raises(ValidationError):
            DailyIssue.model_validate({"theme": "No Date"})

        with pytest.raises(ValidationError):
            DailyIssue.model_validate({"date": "Monday, January 1, 2024"})

    def test_null_articles_and_intro(self):
        """Null articles and intro become empty values."""
        issue = DailyIssue.model_validate({
            "date": "Monday, January 1, 2024",
            "theme": "Sparse",
            "articles": None,
            "intro": None,
        })

        assert issue.articles == []
        assert issue.intro == FourfoldIntro()

    def test_key(self, sample_issue):
        """key is the (date, theme) identity."""
        assert sample_issue.key == ("Monday, January 1, 2024", "Soft Infrastructure")

    def test_to_wire_uses_aliases(self, sample_issue, sample_issue_record):
        """to_wire serializes back to the camelCase document."""
        wire = sample_issue.to_wire()

        assert wire["themeSub"] == sample_issue_record["themeSub"]
        assert wire["finalPrompt"] == sample_issue_record["finalPrompt"]
        assert wire["articles"][0]["focusSentence"] == "Woven bridges carry more than weight."
        assert wire["articles"][1]["futureSpeak"] is None
        assert "theme_sub" not in wire

    def test_articles_not_shared_between_instances(self):
        """Default article lists are independent per issue."""
        first = DailyIssue(date="Monday, January 1, 2024", theme="A")
        second = DailyIssue(date="Monday, January 1, 2024", theme="B")

        first.articles.append(Article(focus_sentence="Only here."))

        assert second.articles == []


class TestVaultPayload:
    """Tests for the VaultPayload model."""

    def test_timestamp_serialized_as_utc_z(self, sample_issue):
        """Timestamp is ISO-8601 UTC with milliseconds and a Z suffix."""
        payload = VaultPayload(
            timestamp=datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc),
            issues=[sample_issue],
        )

        data = json.loads(payload.to_json())

        assert data["timestamp"] == "2024-01-02T03:04:05.678Z"

    def test_issues_in_wire_shape(self, sample_issue):
        """Issues in the payload use camelCase keys."""
        data = json.loads(VaultPayload(issues=[sample_issue]).to_json())

        assert data["issues"][0]["themeSub"] == "柔性基礎設施"
        assert data["issues"][0]["articles"][0]["focusSentence"]

    def test_default_timestamp_is_now(self):
        """Timestamp defaults to the current UTC time."""
        before = datetime.now(timezone.utc)
        payload = VaultPayload()

        assert payload.timestamp >= before
        assert payload.timestamp.tzinfo is not None


class TestRagChunk:
    """Tests for the RagChunk model."""

    def test_optional_context_defaults(self):
        """Context fields default to empty strings."""
        chunk = RagChunk(
            date="Monday, January 1, 2024",
            theme="A (B)",
            category="Materials",
            focus_sentence="Steel bends.",
            content_body="Body",
            source_link="#",
        )

        assert chunk.historical_context == ""
        assert chunk.future_prediction == ""
        assert chunk.keywords == ""
        assert chunk.global_trend_vector == ""


class TestChatMessage:
    """Tests for the ChatMessage model."""

    def test_rejects_unknown_role(self):
        """Only user and model roles are allowed."""
        with pytest.raises(ValidationError):
            ChatMessage(role="system", text="hello")
