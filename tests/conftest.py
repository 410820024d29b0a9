"""Pytest fixtures for silent-architect tests."""

import json

import pytest

from schemas.issue import DailyIssue
from silent_architect.archive import ArchiveStore, MemoryStorage


def make_article(focus_sentence: str, **overrides) -> dict:
    """Build an article record in wire shape."""
    record = {
        "id": focus_sentence.lower().replace(" ", "-")[:12],
        "categoryCode": "04",
        "categoryName": "Architecture × Urban Futures",
        "focusSentence": focus_sentence,
        "body": f"Analysis of {focus_sentence}",
        "link": "https://example.com/article",
        "lineage": "Originating in 1968.",
        "futureSpeak": "Shaping cities until 2040.",
    }
    record.update(overrides)
    return record


def make_issue(date: str, theme: str, article_count: int = 0, **overrides) -> DailyIssue:
    """Build a DailyIssue with numbered articles."""
    record = {
        "date": date,
        "theme": theme,
        "themeSub": f"{theme} sub",
        "intro": {
            "keywords": "Concrete, Code",
            "intersection": "Where matter meets syntax.",
            "vector": "Towards tactile networks.",
            "reflection": "What outlasts the server?",
        },
        "articles": [make_article(f"{theme} fragment {i}") for i in range(article_count)],
        "finalPrompt": "Is the server farm the new cathedral?",
    }
    record.update(overrides)
    return DailyIssue.model_validate(record)


@pytest.fixture
def sample_issue_record():
    """Sample issue document as produced by the generation service."""
    return {
        "date": "Monday, January 1, 2024",
        "theme": "Soft Infrastructure",
        "themeSub": "柔性基礎設施",
        "intro": {
            "keywords": "Membranes, Mesh, Drift",
            "intersection": "Where textiles meet transit.",
            "vector": "Towards adaptive public space.",
            "reflection": "Can a city be folded?",
        },
        "articles": [
            make_article("Woven bridges carry more than weight."),
            make_article(
                "Pavilions breathe through knitted skins.",
                categoryCode="05",
                categoryName="Material × Construction Innovation",
                body="Knitted concrete formwork reduces waste.",
                lineage=None,
                futureSpeak=None,
            ),
        ],
        "finalPrompt": "What does a street remember?",
    }


@pytest.fixture
def sample_issue(sample_issue_record):
    """Sample DailyIssue model."""
    return DailyIssue.model_validate(sample_issue_record)


@pytest.fixture
def memory_storage():
    """Empty in-memory archive storage."""
    return MemoryStorage()


@pytest.fixture
def empty_store(memory_storage):
    """Archive store with seeding disabled."""
    return ArchiveStore(memory_storage, seed=[])


@pytest.fixture
def vault_rows():
    """Raw Vault rows: one row per article, issue fields repeated."""
    issue_fields = {
        "Date": "2024-01-02",
        "Theme": "Y",
        "Theme Sub": "Y sub",
        "Keywords": "Glass, Light",
        "02 / Intersection": "Where light meets glass.",
        "03 / Future Vector": "Towards transparent cities.",
        "04 / Reflection": "Is transparency honest?",
        "Chapter 09 / The Final Prompt": "What does glass hide?",
    }
    return [
        {
            **issue_fields,
            "Focus Sentence": "A",
            "Category": "Spatial Syntax & Phenomenology",
            "Body": "Body A",
            "Link": "https://example.com/a",
            "Lineage": "Since 1851.",
            "Future Vector": "Until 2050.",
        },
        {
            **issue_fields,
            "Focus Sentence": "B",
            "Category": "Algorithmic Beauty & Code",
            "Body": "Body B",
            "Link": "",
            "Lineage": "",
            "Future Vector": "",
        },
    ]


@pytest.fixture
def archive_file(tmp_path, sample_issue_record):
    """An archive JSON file holding the sample issue."""
    path = tmp_path / "archive.json"
    path.write_text(json.dumps([sample_issue_record], ensure_ascii=False))
    return path


@pytest.fixture
def issue_factory():
    """Factory building DailyIssue models with numbered articles."""
    return make_issue


@pytest.fixture
def article_factory():
    """Factory building article records in wire shape."""
    return make_article
