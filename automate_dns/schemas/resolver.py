"""Schemas for Resolver resources."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ResolverOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    provider: str
    hostname: str
    alias: str
    ipv4: str
    is_deleted: bool = Field(
        validation_alias=AliasChoices("is_deleted", "isDeleted"),
        serialization_alias="isDeleted",
    )
    mtime: datetime
    ctime: datetime

    @field_validator("mtime", "ctime")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; they are stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ResolverList(BaseModel):
    items: list[ResolverOut]
    limit: int
    offset: int
    count: int


class ServiceInfo(BaseModel):
    service: str
    endpoints: list[str]
