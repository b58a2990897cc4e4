"""Merge a directory's config.yml and index.mdx frontmatter into a config."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from artifacts.models.artifacts.platforms import GuideConfig, PlatformConfig
from parse.config_yaml import load_config_yaml
from parse.errors import SourceError
from parse.frontmatter import parse_frontmatter
from scan.files import CONFIG_YML, INDEX_MDX

if TYPE_CHECKING:
    from scan.files import SourceDir

# Source files spell keys in camelCase only; snake_case field names are
# accepted from Python callers but not on disk.
_ATTRIBUTE_SPELLINGS: dict[str, str] = {
    name: field.alias
    for name, field in GuideConfig.model_fields.items()
    if field.alias is not None and field.alias != name
}


def read_source_data(source: SourceDir) -> dict[str, Any]:
    """Return the raw merged mapping for a source directory.

    Only the files the scanner accepted (``source.files``) are read.
    Frontmatter keys override config.yml keys.
    """
    accepted = {path.name: path for path in source.files}
    data: dict[str, Any] = {}

    config_path = accepted.get(CONFIG_YML)
    if config_path is not None:
        data.update(load_config_yaml(config_path))

    index_path = accepted.get(INDEX_MDX)
    if index_path is not None:
        try:
            text = index_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Failed to read {index_path}: {exc}"
            raise SourceError(msg) from exc
        data.update(parse_frontmatter(text, source=index_path))

    return data


def _check_spelling(source: SourceDir, data: dict[str, Any]) -> None:
    misspelled = sorted(key for key in data if key in _ATTRIBUTE_SPELLINGS)
    if misspelled:
        hints = ", ".join(f"'{_ATTRIBUTE_SPELLINGS[key]}'" for key in misspelled)
        msg = (
            f"Invalid {source.kind} config in {source.path}: "
            f"keys {misspelled} must be written as {hints}"
        )
        raise SourceError(msg)


def load_source_config(source: SourceDir) -> PlatformConfig:
    """Load and validate the config of one source directory.

    Platform directories yield a ``PlatformConfig``; guide and integration
    directories yield a ``GuideConfig``.
    """
    data = read_source_data(source)
    _check_spelling(source, data)
    model = PlatformConfig if source.kind == "platform" else GuideConfig

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid {source.kind} config in {source.path}: {exc}"
        raise SourceError(msg) from exc


__all__ = ["load_source_config", "read_source_data"]
