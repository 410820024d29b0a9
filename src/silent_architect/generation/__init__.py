"""Generation service collaborators: issue generator and curator chat."""

from .curator import CuratorChat, build_vault_context
from .generator import IssueGenerator, strip_code_fences

__all__ = [
    "CuratorChat",
    "IssueGenerator",
    "build_vault_context",
    "strip_code_fences",
]
