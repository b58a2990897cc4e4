"""Validation helpers for generated platform artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    PLATFORMS_JSON,
    SEARCH_INDEX_JSONL,
)
from contract.models import PlatformsDocument, SearchRecord

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    """Parse every artifact back through its model and cross-check them.

    Search records must name entities present in platforms.json, and
    guide/integration keys must be unique across the whole tree.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )

    if result.errors:
        return result

    document = _validate_platforms(
        artifacts_dir / PLATFORMS_JSON,
        result,
        strict_schema_version=strict_schema_version,
    )
    records = _validate_search_index(
        artifacts_dir / SEARCH_INDEX_JSONL,
        result,
        strict_schema_version=strict_schema_version,
    )

    if document is not None:
        known_keys = _collect_keys(document, artifacts_dir / PLATFORMS_JSON, result)
        for line_number, record in records:
            if record.key not in known_keys:
                result.errors.append(
                    ValidationMessage(
                        artifact="search_index",
                        path=artifacts_dir / SEARCH_INDEX_JSONL,
                        line=line_number,
                        message=f"Search record '{record.key}' not in platforms.json.",
                    )
                )

    return result


def _validate_platforms(
    path: Path,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> PlatformsDocument | None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact="platforms",
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(
                artifact="platforms",
                path=path,
                message="Expected JSON object for platforms.json.",
            )
        )
        return None

    try:
        document = PlatformsDocument.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact="platforms",
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None

    _check_schema_version(
        "platforms",
        path,
        None,
        "schema_version" in raw,
        document.schema_version,
        result,
        strict_schema_version=strict_schema_version,
    )
    return document


def _collect_keys(
    document: PlatformsDocument, path: Path, result: ValidationResult
) -> set[str]:
    keys: set[str] = set()
    child_keys: set[str] = set()
    for platform in document.platforms:
        if platform.key in keys:
            result.errors.append(
                ValidationMessage(
                    artifact="platforms",
                    path=path,
                    message=f"Duplicate platform key '{platform.key}'.",
                )
            )
        keys.add(platform.key)
        for child in [*platform.guides, *platform.integrations]:
            if child.key in child_keys:
                result.errors.append(
                    ValidationMessage(
                        artifact="platforms",
                        path=path,
                        message=f"Duplicate guide or integration key '{child.key}'.",
                    )
                )
            child_keys.add(child.key)
    return keys | child_keys


def _validate_search_index(
    path: Path,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> list[tuple[int, SearchRecord]]:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact="search_index",
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return []

    records: list[tuple[int, SearchRecord]] = []
    schema_checked = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data: Any = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact="search_index",
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            try:
                record = SearchRecord.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact="search_index",
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            records.append((line_number, record))
            schema_present = isinstance(data, dict) and "schema_version" in data
            if not schema_checked and (
                not schema_present or record.schema_version != ARTIFACT_SCHEMA_VERSION
            ):
                _check_schema_version(
                    "search_index",
                    path,
                    line_number,
                    schema_present,
                    record.schema_version,
                    result,
                    strict_schema_version=strict_schema_version,
                )
                schema_checked = True

    return records


def _check_schema_version(
    artifact_name: str,
    path: Path,
    line: int | None,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version != ARTIFACT_SCHEMA_VERSION:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=(
                    "Schema version mismatch: "
                    f"expected {ARTIFACT_SCHEMA_VERSION}, got {schema_version}."
                ),
            )
        )
        return

    if not schema_present:
        message = f"Missing schema_version; defaulted to {ARTIFACT_SCHEMA_VERSION}."
        target = result.errors if strict_schema_version else result.warnings
        target.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=message,
            )
        )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
