"""Lead backfill request schemas."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_serializer, field_validator

from ..utils.dates import isoformat_z


def parse_datetime(value: object) -> object:
    """Accept ISO date/datetime strings and epoch seconds or milliseconds."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        # Values beyond year 33658 in seconds are taken to be milliseconds
        seconds = value / 1000 if abs(value) >= 1e12 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return value
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return value


class BackfillRecord(BaseModel):
    """One historical conversion to replay."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    via: str
    external_id: str = Field(alias="externalId")
    event_name: str = Field(alias="eventName")
    creation_date: datetime = Field(alias="creationDate")

    @field_validator("creation_date", mode="before")
    @classmethod
    def _coerce_creation_date(cls, value: object) -> object:
        return parse_datetime(value)

    @field_validator("creation_date")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_serializer("creation_date")
    def _serialize_creation_date(self, value: datetime) -> str:
        return isoformat_z(value)

    @property
    def dedup_key(self) -> str:
        return f"{self.external_id}:{self.event_name}"


class BackfillBatch(RootModel[list[BackfillRecord]]):
    pass
