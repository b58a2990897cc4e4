"""Artifact contract definitions.

This module defines the stable boundary between platformdocs and the
consumers of its output (search indexer, sidebar renderer, API-doc
formatter): artifact filenames, formats and the schema version.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact schema version for generated platform artifacts.
ARTIFACT_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
PLATFORMS_JSON = "platforms.json"
SEARCH_INDEX_JSONL = "search_index.jsonl"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "platforms": ArtifactSpec(
        filename=PLATFORMS_JSON,
        format="json",
        required_fields_note="PlatformsDocument with fully resolved platforms.",
    ),
    "search_index": ArtifactSpec(
        filename=SEARCH_INDEX_JSONL,
        format="jsonl",
        required_fields_note="SearchRecord fields required by contract.",
    ),
}


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "PLATFORMS_JSON",
    "SEARCH_INDEX_JSONL",
    "ArtifactSpec",
]
