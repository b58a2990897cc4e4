"""Artifact generators for platformdocs."""

from artifacts.generators.platforms import PlatformsGenerator
from artifacts.generators.search import SearchIndexGenerator, build_search_records

__all__ = [
    "PlatformsGenerator",
    "SearchIndexGenerator",
    "build_search_records",
]
