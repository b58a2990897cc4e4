"""Platform models exposed at the contract boundary."""

from artifacts.models.artifacts.platforms import (
    Platform,
    PlatformConfig,
    PlatformEntry,
    PlatformGuide,
    PlatformIntegration,
)
from artifacts.models.artifacts.search import PlatformsDocument, SearchRecord

__all__ = [
    "Platform",
    "PlatformConfig",
    "PlatformEntry",
    "PlatformGuide",
    "PlatformIntegration",
    "PlatformsDocument",
    "SearchRecord",
]
