"""Platform metadata models.

This module defines the shapes used to describe platforms, guides and
integrations in the documentation tree. ``PlatformConfig`` is the raw input
merged from a directory's ``config.yml`` and ``index.mdx`` frontmatter;
``Platform``, ``PlatformGuide`` and ``PlatformIntegration`` are the resolved
entities, discriminated by their ``type`` field.

Python attributes are snake_case. The wire format (source files and
generated artifacts) is camelCase, e.g. ``caseStyle``, ``fallbackPlatform``;
snake_case names are accepted only from Python callers, and source files
using them are rejected by ``parse.sources``.

The resolved variants subclass ``PlatformConfig`` to share its field
declarations, so ``isinstance(guide, PlatformConfig)`` holds. Nothing relies
on that; code dispatches on ``type``.
"""

from __future__ import annotations

from typing import Annotated, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from utils import qualify_key

PlatformCaseStyle = Literal["canonical", "camelCase", "PascalCase", "snake_case"]
PlatformSupportLevel = Literal["production", "community"]
PlatformCategory = Literal["browser", "desktop", "mobile", "server", "serverless"]
EntryType = Literal["platform", "guide", "integration"]

VALID_CASE_STYLES = frozenset(get_args(PlatformCaseStyle))
VALID_SUPPORT_LEVELS = frozenset(get_args(PlatformSupportLevel))
VALID_CATEGORIES = frozenset(get_args(PlatformCategory))


class PlatformConfig(BaseModel):
    """Partially specified platform or guide configuration.

    Every field is optional; a field missing from both sources stays
    ``None``. There is no identifier here, the key comes from the directory
    the config was read from. Unknown keys (page-level frontmatter such as
    ``description``) are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    aliases: list[str] | None = Field(
        default=None,
        description="Additional identifiers, e.g. 'cocoa' for 'apple'",
    )
    case_style: PlatformCaseStyle | None = Field(
        default=None,
        description="Casing used when rendering SDK option and function names",
    )
    categories: list[PlatformCategory] | None = None
    fallback_platform: str | None = Field(
        default=None,
        description="Key of the platform to inherit unset values from",
    )
    icon: str | None = None
    keywords: list[str] | None = Field(
        default=None, description="Search terms"
    )
    language: str | None = Field(
        default=None,
        description="Programming language used to format SDK API docs",
    )
    platform_title: str | None = Field(
        default=None,
        description="Sidebar title when it differs from the default guide title",
    )
    sdk: str | None = Field(
        default=None, description="SDK registry identifier"
    )
    show_integrations_in_search: bool | None = None
    support_level: PlatformSupportLevel | None = None
    title: str | None = Field(
        default=None, description="Human readable name"
    )


class GuideConfig(PlatformConfig):
    """Configuration read from a guide or integration directory."""

    fallback_guide: str | None = Field(
        default=None,
        description="Key (or sibling name) of the guide to inherit unset values from",
    )


class PlatformGuide(PlatformConfig):
    """A guide refines a platform for a framework or runtime.

    ``platform`` is the owning platform's key, a plain identifier rather than
    an object reference.
    """

    model_config = ConfigDict(extra="forbid")

    key: str = Field(description="Fully qualified key: '<platform>.<name>'")
    name: str = Field(description="Directory name of the guide")
    platform: str
    type: Literal["guide"] = "guide"
    url: str
    fallback_guide: str | None = None

    @model_validator(mode="after")
    def _check_key(self) -> PlatformGuide:
        _check_qualified_key(self.key, self.platform, self.name)
        return self


class PlatformIntegration(PlatformConfig):
    """A third-party integration, shaped like a guide but with a required icon."""

    model_config = ConfigDict(extra="forbid")

    key: str
    name: str
    platform: str
    type: Literal["integration"] = "integration"
    url: str
    fallback_guide: str | None = None
    icon: str = Field(min_length=1)

    @model_validator(mode="after")
    def _check_key(self) -> PlatformIntegration:
        _check_qualified_key(self.key, self.platform, self.name)
        return self


class Platform(PlatformConfig):
    """The resolved representation of a top-level platform."""

    model_config = ConfigDict(extra="forbid")

    key: str = Field(description="Directory name of the platform")
    name: str = Field(description="Same as key; use title for display")
    type: Literal["platform"] = "platform"
    url: str
    guides: list[PlatformGuide] = Field(default_factory=list)
    integrations: list[PlatformIntegration] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_children(self) -> Platform:
        if self.name != self.key:
            msg = f"Platform name '{self.name}' must equal its key '{self.key}'"
            raise ValueError(msg)

        seen: set[str] = set()
        for child in [*self.guides, *self.integrations]:
            if child.platform != self.key:
                msg = (
                    f"{child.type.capitalize()} '{child.key}' belongs to "
                    f"'{child.platform}', not '{self.key}'"
                )
                raise ValueError(msg)
            if child.key in seen:
                msg = f"Duplicate guide or integration key '{child.key}'"
                raise ValueError(msg)
            seen.add(child.key)
        return self


def _check_qualified_key(key: str, platform: str, name: str) -> None:
    expected = qualify_key(platform, name)
    if key != expected:
        msg = f"Key '{key}' does not match '{expected}'"
        raise ValueError(msg)


PlatformEntry = Annotated[
    Platform | PlatformGuide | PlatformIntegration,
    Field(discriminator="type"),
]
ChildEntry = PlatformGuide | PlatformIntegration


def dump_entry(entry: BaseModel) -> dict[str, object]:
    """Serialize a model to its camelCase wire form, omitting unset fields."""
    return entry.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "VALID_CASE_STYLES",
    "VALID_CATEGORIES",
    "VALID_SUPPORT_LEVELS",
    "ChildEntry",
    "EntryType",
    "GuideConfig",
    "Platform",
    "PlatformCaseStyle",
    "PlatformCategory",
    "PlatformConfig",
    "PlatformEntry",
    "PlatformGuide",
    "PlatformIntegration",
    "PlatformSupportLevel",
    "dump_entry",
]
