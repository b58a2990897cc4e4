"""Fallback resolution and lookup for platform metadata."""

from resolve.registry import PlatformRegistry
from resolve.resolver import (
    PLATFORM_INHERITED_FIELDS,
    ResolutionError,
    merge_config,
    resolve_platforms,
)

__all__ = [
    "PLATFORM_INHERITED_FIELDS",
    "PlatformRegistry",
    "ResolutionError",
    "merge_config",
    "resolve_platforms",
]
