"""Model namespace for platformdocs schemas."""

from artifacts.models.artifacts.platforms import (
    GuideConfig,
    Platform,
    PlatformConfig,
    PlatformEntry,
    PlatformGuide,
    PlatformIntegration,
)
from artifacts.models.artifacts.search import PlatformsDocument, SearchRecord

__all__ = [
    "GuideConfig",
    "Platform",
    "PlatformConfig",
    "PlatformEntry",
    "PlatformGuide",
    "PlatformIntegration",
    "PlatformsDocument",
    "SearchRecord",
]
