from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "platformdocs.toml"

MissingFallbackBehavior = Literal["error", "warn"]


class PlatformDocsConfig(BaseModel):
    """Configuration for platform resolution and artifact generation."""

    model_config = ConfigDict(extra="forbid")

    platforms_dir: str = Field(
        default="docs/platforms",
        description="Relative path to the platform tree",
    )
    output_dir: str = Field(
        default=".platformdocs",
        description="Output directory for generated artifacts",
    )
    url_prefix: str = Field(
        default="/platforms",
        description="Prefix for generated platform, guide and integration URLs",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for source directories to include (empty = all)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for source directories to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    on_missing_fallback: MissingFallbackBehavior = Field(
        default="error",
        description="Behavior when fallbackPlatform/fallbackGuide names no entity",
    )

    @field_validator("url_prefix")
    @classmethod
    def validate_url_prefix(cls, v: str) -> str:
        if "://" in v:
            msg = "url_prefix must be a relative path, not an absolute URL"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def _resolve_within_root(root: Path, value: str, label: str) -> Path:
    if not value:
        msg = f"{label} must be a non-empty relative path"
        raise ConfigError(msg)

    if value.startswith("~") or Path(value).is_absolute():
        msg = f"{label} must be a relative path within the docs root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved = (resolved_root / value).resolve()
    except OSError as exc:
        msg = f"Failed to resolve {label} '{value}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"{label} '{value}' escapes the docs root"
        raise ConfigError(msg) from exc

    return resolved


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the docs root.

    Absolute paths and paths that escape the root are rejected.
    """
    return _resolve_within_root(root, output_dir, "output_dir")


def resolve_platforms_dir(root: Path, platforms_dir: str) -> Path:
    """Resolve the platform tree location; it need not exist yet."""
    return _resolve_within_root(root, platforms_dir, "platforms_dir")


def load_config(root: Path) -> PlatformDocsConfig:
    """Load configuration from platformdocs.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return PlatformDocsConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return PlatformDocsConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
