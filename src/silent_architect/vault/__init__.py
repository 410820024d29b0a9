"""Remote Vault adapter and reconciliation."""

from .adapter import (
    VaultAdapter,
    format_vault_date,
    normalize_field_name,
    resolve_field,
    rows_to_issues,
)
from .outcome import GenerationResult, ReconcileReport, VaultOutcome
from .reconciler import IssueSource, Reconciler

__all__ = [
    "GenerationResult",
    "IssueSource",
    "ReconcileReport",
    "Reconciler",
    "VaultAdapter",
    "VaultOutcome",
    "format_vault_date",
    "normalize_field_name",
    "resolve_field",
    "rows_to_issues",
]
