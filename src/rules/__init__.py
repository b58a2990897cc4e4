"""Configuration and formatting rules for platformdocs."""

from rules.casing import format_case_style
from rules.config import (
    ConfigError,
    PlatformDocsConfig,
    load_config,
    resolve_output_dir,
    resolve_platforms_dir,
)

__all__ = [
    "ConfigError",
    "PlatformDocsConfig",
    "format_case_style",
    "load_config",
    "resolve_output_dir",
    "resolve_platforms_dir",
]
