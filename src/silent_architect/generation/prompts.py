"""Instructions and fixed texts for the generation service."""

from datetime import date

CATEGORIES = [
    ("01", "AI × Design Application"),
    ("02", "Geopolitics × Design Logistics"),
    ("03", "Spatial Syntax & Phenomenology"),
    ("04", "Architecture × Urban Futures"),
    ("05", "Material × Construction Innovation"),
    ("06", "Science & Perceptual Interfaces"),
    ("07", "Digital Media × Narrative Form"),
    ("08", "Policy × Ecological Repair"),
    ("09", "Design Pedagogy & Humanism"),
    ("10", "Studios, Objects, Practices"),
    ("11", "Critical Discourse & Recognition"),
    ("12", "Botanical Composition"),
    ("13", "Edible Narratives"),
    ("14", "Garment Semiotics"),
    ("15", "Algorithmic Beauty & Code"),
    ("16", "Prompt Engineering & Syntax Psychology"),
]

ISSUE_SCHEMA = """{
  "date": "Month DD, YYYY",
  "theme": "Title",
  "themeSub": "Subtitle",
  "intro": {"keywords": "", "intersection": "", "vector": "", "reflection": ""},
  "articles": [
    {
      "id": "uuid",
      "categoryCode": "01",
      "categoryName": "AI × Design Application",
      "focusSentence": "",
      "body": "",
      "link": "REAL_URL or SEARCH_QUERY:keywords",
      "lineage": "",
      "futureSpeak": ""
    }
  ],
  "finalPrompt": ""
}"""


def build_system_instruction() -> str:
    """System instruction for issue generation."""
    categories = "\n".join(f"- {code}: {name}" for code, name in CATEGORIES)
    return f"""You are "The Silent Architect", a curator of ideas.

LINKS:
1. Only use URLs found in your search grounding metadata.
2. If no specific link is found, set "link" to SEARCH_QUERY:[keywords].

CONTENT:
- Generate exactly 6 articles, each in a different category.
- "lineage" names the year of origin; "futureSpeak" names a target year or duration.
- Narrative fields are written in Traditional Chinese (Taiwan).

CATEGORIES:
{categories}

Respond with JSON only, matching:
{ISSUE_SCHEMA}
"""


def build_search_prompt(search_after: date) -> str:
    """User prompt asking for six grounded fragments published after a date."""
    return f"""Scan design and architecture news published after {search_after.isoformat()}.
- Use Google Search to find 6 high-quality news fragments.
- Take each link from the grounding metadata.
- Map each fragment to a unique category.
- Deliver exactly 6 fragments in the specified JSON format."""


CURATOR_INSTRUCTION = """You are "The Curator", the resident agent of The Silent Architect.
Provide sharp synthesis and analysis grounded in the Vault below.

KNOWLEDGE BASE:
{vault}

TONE: Intellectual, structural, Traditional Chinese (Taiwan)."""

EMPTY_VAULT_TEXT = "目前檔案庫尚無資料。"

CURATOR_GREETING = (
    "我是 TSA 檔案庫的策展專員 (The Curator)。"
    "您可以輸入查詢，我將根據檔案庫內容進行跨域推演。"
)
CURATOR_EMPTY_REPLY = "系統暫時失去回應。"
CURATOR_ERROR_REPLY = "連線異常，請重試。"
