"""YAML frontmatter extraction for index.mdx documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from parse.errors import SourceError

if TYPE_CHECKING:
    from pathlib import Path

FRONTMATTER_DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split a document into its raw frontmatter block and body.

    The block must open on the first line. Returns ``(None, text)`` when the
    document has no frontmatter.

    Raises:
        SourceError: If the opening delimiter is never closed.
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].strip() == FRONTMATTER_DELIMITER:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    msg = "Unterminated frontmatter block"
    raise SourceError(msg)


def parse_frontmatter(text: str, *, source: Path | None = None) -> dict[str, Any]:
    """Parse the frontmatter of an MDX document into a mapping.

    Documents without frontmatter and empty blocks yield an empty dict.
    """
    where = f" in {source}" if source is not None else ""
    try:
        block, _ = split_frontmatter(text)
    except SourceError as exc:
        msg = f"{exc}{where}"
        raise SourceError(msg) from exc

    if block is None:
        return {}

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        msg = f"Invalid frontmatter YAML{where}: {exc}"
        raise SourceError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Frontmatter{where} must be a mapping, got {type(data).__name__}"
        raise SourceError(msg)
    return data


__all__ = ["FRONTMATTER_DELIMITER", "parse_frontmatter", "split_frontmatter"]
