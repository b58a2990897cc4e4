"""Determinism verification for platformdocs artifacts."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from artifacts.write import generate_all_artifacts


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Check that committed artifacts match a fresh resolution of the docs tree.

    Regenerates the artifacts into a temporary directory and compares them
    byte-for-byte against artifacts_dir, using relative paths.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_all_artifacts(root=root, out_dir=temp_path)

        existing = _list_relative_files(artifacts_dir)
        regenerated = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in existing - regenerated)
        extra = sorted(str(path) for path in regenerated - existing)
        mismatches = sorted(
            str(path)
            for path in existing & regenerated
            if not filecmp.cmp(artifacts_dir / path, temp_path / path, shallow=False)
        )

    return DeterminismResult(
        ok=not missing and not extra and not mismatches,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )
