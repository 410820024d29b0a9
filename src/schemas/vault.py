"""Vault push payload schema."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_serializer

from .issue import DailyIssue


class VaultPayload(BaseModel):
    """Body of a Vault push request.

    Attributes:
        timestamp: When the push was made (serialized as ISO-8601 UTC)
        issues: Issues being pushed, serialized in camelCase wire shape
    """

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    issues: list[DailyIssue] = []

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
