"""Result types for Vault and reconciliation operations.

Vault operations never raise past their boundary. These records carry the
result together with a success flag and reason, so callers can tell
"nothing new" apart from "the Vault could not be reached".
"""

from dataclasses import dataclass, field

from schemas.issue import DailyIssue, GenerationStatus


@dataclass
class VaultOutcome:
    """Result of a Vault push or pull.

    Attributes:
        success: Whether the operation completed at the transport level
        message: Human-readable status line
        issues: Issues reconstructed by a pull (empty for pushes)
        reason: Failure reason when success is False
    """

    success: bool
    message: str = ""
    issues: list[DailyIssue] = field(default_factory=list)
    reason: str | None = None


@dataclass
class ReconcileReport:
    """Summary of one reconcile cycle.

    Attributes:
        pulled: Number of issues reconstructed from the Vault
        saved: Number of those issues persisted locally
        success: Whether the pull itself succeeded
        reason: Pull failure reason, if any
    """

    pulled: int = 0
    saved: int = 0
    success: bool = True
    reason: str | None = None


@dataclass
class GenerationResult:
    """Outcome of generating and publishing a new issue.

    Attributes:
        status: "success" or "error"
        issue: The generated issue, if any
        push: Outcome of pushing the issue to the Vault
    """

    status: GenerationStatus
    issue: DailyIssue | None = None
    push: VaultOutcome | None = None
