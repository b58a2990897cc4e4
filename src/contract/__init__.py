"""Stable contract surface for platformdocs consumers.

Renderers and search indexers should import from here rather than from the
internal model modules.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    PLATFORMS_JSON,
    SEARCH_INDEX_JSONL,
    ArtifactSpec,
)

_MODEL_NAMES = frozenset(
    {
        "Platform",
        "PlatformConfig",
        "PlatformEntry",
        "PlatformGuide",
        "PlatformIntegration",
        "PlatformsDocument",
        "SearchRecord",
    }
)


def __getattr__(name: str) -> object:
    if name in _MODEL_NAMES:
        from contract import models

        return getattr(models, name)

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "PLATFORMS_JSON",
    "SEARCH_INDEX_JSONL",
    "ArtifactSpec",
    "Platform",
    "PlatformConfig",
    "PlatformEntry",
    "PlatformGuide",
    "PlatformIntegration",
    "PlatformsDocument",
    "SearchRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
