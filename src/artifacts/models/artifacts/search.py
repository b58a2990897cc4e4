"""Search index and platform tree artifact models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.artifacts.platforms import EntryType, Platform


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class SearchRecord(BaseModel):
    """One searchable platform, guide or integration."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default_factory=_artifact_schema_version)
    key: str
    type: EntryType
    platform: str
    title: str
    url: str
    keywords: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    sdk: str | None = None
    icon: str | None = None


class PlatformsDocument(BaseModel):
    """Schema for platforms.json: the full resolved platform tree."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    platforms: list[Platform] = Field(default_factory=list)


__all__ = ["PlatformsDocument", "SearchRecord"]
