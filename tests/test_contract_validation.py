from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    PLATFORMS_JSON,
    SEARCH_INDEX_JSONL,
)
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    validate_artifacts,
)


def _platform(key: str = "python", **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "key": key,
        "name": key,
        "type": "platform",
        "url": f"/platforms/{key}/",
    }
    data.update(extra)
    return data


def _guide(platform: str, name: str) -> dict[str, Any]:
    return {
        "key": f"{platform}.{name}",
        "name": name,
        "platform": platform,
        "type": "guide",
        "url": f"/platforms/{platform}/guides/{name}/",
    }


def _record(key: str = "python", **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "schema_version": ARTIFACT_SCHEMA_VERSION,
        "key": key,
        "type": "platform",
        "platform": key,
        "title": key.title(),
        "url": f"/platforms/{key}/",
    }
    data.update(extra)
    return data


def _write_platforms(d: Path, platforms: list[dict[str, Any]], **extra: Any) -> None:
    document: dict[str, Any] = {
        "schema_version": ARTIFACT_SCHEMA_VERSION,
        "platforms": platforms,
    }
    document.update(extra)
    (d / PLATFORMS_JSON).write_text(json.dumps(document), encoding="utf-8")


def _write_search_index(d: Path, records: list[dict[str, Any]]) -> None:
    payload = "".join(json.dumps(record) + "\n" for record in records)
    (d / SEARCH_INDEX_JSONL).write_text(payload, encoding="utf-8")


def _write_valid_artifacts(d: Path) -> None:
    """Write a minimal valid artifact set to directory d."""
    d.mkdir(parents=True, exist_ok=True)
    _write_platforms(
        d,
        [
            _platform(
                "python",
                caseStyle="snake_case",
                guides=[_guide("python", "django")],
            )
        ],
    )
    _write_search_index(
        d,
        [
            _record("python"),
            _record("python.django", type="guide", platform="python"),
        ],
    )


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_line() -> None:
    """ValidationMessage.location returns path:line when line is present."""
    msg = ValidationMessage("search_index", Path("x.jsonl"), "bad", line=7)
    assert msg.location() == "x.jsonl:7"


def test_validation_message_location_without_line() -> None:
    """ValidationMessage.location returns only path when line is missing."""
    msg = ValidationMessage("platforms", Path("x.json"), "bad")
    assert msg.location() == "x.json"


def test_validation_message_to_dict() -> None:
    """ValidationMessage.to_dict returns the expected payload."""
    msg = ValidationMessage("search_index", Path("x.jsonl"), "bad", line=3)
    assert msg.to_dict() == {
        "artifact": "search_index",
        "path": "x.jsonl",
        "line": 3,
        "message": "bad",
    }


def test_validation_result_ok_reflects_errors() -> None:
    """ValidationResult.ok is false once at least one error exists."""
    assert ValidationResult().ok is True
    result = ValidationResult(errors=[ValidationMessage("x", Path("a"), "boom")])
    assert result.ok is False


# Group 2: Directory handling


def test_missing_directory() -> None:
    """validate_artifacts reports a missing artifacts directory."""
    result = validate_artifacts(Path("/nonexistent"))
    assert result.ok is False
    assert _messages_contain(result.errors, "Artifacts directory does not exist")


def test_not_a_directory(tmp_path: Path) -> None:
    """validate_artifacts reports a path that is not a directory."""
    file_path = tmp_path / "not-a-dir"
    file_path.write_text("x", encoding="utf-8")

    result = validate_artifacts(file_path)

    assert result.ok is False
    assert _messages_contain(result.errors, "Artifacts path is not a directory")


def test_missing_artifact_files(tmp_path: Path) -> None:
    """validate_artifacts reports each required artifact when directory is empty."""
    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert len(result.errors) == len(ARTIFACT_SPECS)
    assert all("Required artifact file is missing" in m.message for m in result.errors)


# Group 3: Happy path


def test_valid_artifacts_pass(tmp_path: Path) -> None:
    """A complete valid artifact set produces no errors or warnings."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)

    result = validate_artifacts(artifacts_dir)

    assert result.ok is True
    assert result.errors == []
    assert result.warnings == []


# Group 4: platforms.json


def test_platforms_invalid_json(tmp_path: Path) -> None:
    """Unparseable platforms.json produces a JSON error."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / PLATFORMS_JSON).write_text("{not-json", encoding="utf-8")

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Invalid JSON")


def test_platforms_not_an_object(tmp_path: Path) -> None:
    """A JSON array in platforms.json is rejected."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / PLATFORMS_JSON).write_text("[]", encoding="utf-8")

    result = validate_artifacts(artifacts_dir)

    assert _messages_contain(result.errors, "Expected JSON object")


def test_platforms_schema_failure_on_broken_invariant(tmp_path: Path) -> None:
    """A guide that does not point back to its platform fails validation."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    foreign = _guide("ruby", "rails")
    _write_platforms(artifacts_dir, [_platform("python", guides=[foreign])])

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Schema validation failed")


def test_platforms_integration_without_icon_rejected(tmp_path: Path) -> None:
    """Integrations in platforms.json must carry an icon."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    integration = {**_guide("python", "celery"), "type": "integration"}
    integration["url"] = "/platforms/python/integrations/celery/"
    _write_platforms(artifacts_dir, [_platform("python", integrations=[integration])])

    result = validate_artifacts(artifacts_dir)

    assert _messages_contain(result.errors, "Schema validation failed")


def test_platforms_duplicate_platform_key(tmp_path: Path) -> None:
    """A platform key listed twice is reported."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    _write_platforms(artifacts_dir, [_platform("python"), _platform("python")])
    _write_search_index(artifacts_dir, [_record("python")])

    result = validate_artifacts(artifacts_dir)

    assert _messages_contain(result.errors, "Duplicate platform key 'python'")


def test_platforms_wrong_schema_version(tmp_path: Path) -> None:
    """Wrong schema_version in platforms.json produces a mismatch error."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    _write_platforms(
        artifacts_dir,
        [_platform("python", guides=[_guide("python", "django")])],
        schema_version=999,
    )

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Schema version mismatch")


# Group 5: search_index.jsonl


def test_jsonl_invalid_json(tmp_path: Path) -> None:
    """Invalid JSON in JSONL produces a line-level JSON error."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SEARCH_INDEX_JSONL).write_text("{not-json}\n", encoding="utf-8")

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Invalid JSON")
    assert result.errors[0].line == 1


def test_jsonl_pydantic_failure(tmp_path: Path) -> None:
    """Schema-invalid JSONL records produce schema validation errors."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    _write_search_index(artifacts_dir, [_record("python", type="sdk")])

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Schema validation failed")


def test_jsonl_record_must_name_known_entity(tmp_path: Path) -> None:
    """Search records for keys absent from platforms.json are errors."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    _write_search_index(artifacts_dir, [_record("python"), _record("ruby")])

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(
        result.errors, "Search record 'ruby' not in platforms.json"
    )
    assert result.errors[0].line == 2


def test_jsonl_missing_schema_version_lenient(tmp_path: Path) -> None:
    """Missing schema_version is a warning in lenient mode."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    record = _record("python")
    del record["schema_version"]
    _write_search_index(artifacts_dir, [record])

    result = validate_artifacts(artifacts_dir)

    assert result.ok is True
    assert result.errors == []
    assert _messages_contain(result.warnings, "Missing schema_version")


def test_jsonl_missing_schema_version_strict(tmp_path: Path) -> None:
    """Missing schema_version is an error in strict mode."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    record = _record("python")
    del record["schema_version"]
    _write_search_index(artifacts_dir, [record])

    result = validate_artifacts(artifacts_dir, strict_schema_version=True)

    assert result.ok is False
    assert _messages_contain(result.errors, "Missing schema_version")


def test_jsonl_schema_dedup(tmp_path: Path) -> None:
    """Missing schema_version warning is emitted once per JSONL file."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    record = _record("python")
    del record["schema_version"]
    _write_search_index(artifacts_dir, [record, record])

    result = validate_artifacts(artifacts_dir)

    warnings = [m for m in result.warnings if m.artifact == "search_index"]
    assert len(warnings) == 1
    assert "Missing schema_version" in warnings[0].message


def test_jsonl_os_error(tmp_path: Path) -> None:
    """JSONL file open OSError is surfaced as a validation error."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    target = artifacts_dir / SEARCH_INDEX_JSONL
    original_open = Path.open

    def _patched_open(self: Path, *args: Any, **kwargs: Any) -> Any:
        if self == target and args and args[0] == "rb":
            raise OSError("boom")
        return original_open(self, *args, **kwargs)

    with patch.object(Path, "open", _patched_open):
        result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Failed to read file")


def test_jsonl_empty_lines_skipped(tmp_path: Path) -> None:
    """Blank JSONL lines are ignored by validation."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SEARCH_INDEX_JSONL).write_text(
        "\n\n" + json.dumps(_record("python")) + "\n\n", encoding="utf-8"
    )

    result = validate_artifacts(artifacts_dir)

    assert result.ok is True
