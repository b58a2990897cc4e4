"""Loader for per-directory config.yml files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from parse.errors import SourceError

if TYPE_CHECKING:
    from pathlib import Path


def load_config_yaml(path: Path) -> dict[str, Any]:
    """Load a config.yml file with PyYAML's safe loader.

    Args:
        path: Path to the YAML file

    Returns:
        The top-level mapping, or an empty dict when the file is empty.

    Raises:
        SourceError: If the file cannot be read, is not valid YAML, or its
            top level is not a mapping.
    """
    try:
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise SourceError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise SourceError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = (
            f"Expected a mapping at the top level of {path}, "
            f"got {type(data).__name__}"
        )
        raise SourceError(msg)
    return data


__all__ = ["load_config_yaml"]
