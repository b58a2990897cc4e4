"""SDK option name casing per platform case style."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from artifacts.models.artifacts.platforms import VALID_CASE_STYLES

if TYPE_CHECKING:
    from artifacts.models.artifacts.platforms import PlatformCaseStyle

_WORD_BOUNDARY = re.compile(r"[-_\s]+")


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def format_case_style(value: str, case_style: PlatformCaseStyle | None) -> str:
    """Render an SDK option or function name in a platform's case style.

    Names are written in the docs in canonical form (``before-send``) and
    split on dashes, underscores and whitespace.

    Examples:
        >>> format_case_style("before-send", "PascalCase")
        'BeforeSend'
        >>> format_case_style("before-send", "camelCase")
        'beforeSend'
        >>> format_case_style("before-send", "snake_case")
        'before_send'
        >>> format_case_style("before-send", None)
        'before-send'
    """
    if case_style is None or case_style == "canonical":
        return value

    if case_style not in VALID_CASE_STYLES:
        msg = (
            f"Invalid case style '{case_style}'. "
            f"Valid styles: {', '.join(sorted(VALID_CASE_STYLES))}"
        )
        raise ValueError(msg)

    words = [word for word in _WORD_BOUNDARY.split(value) if word]
    if not words:
        return value

    if case_style == "snake_case":
        return "_".join(word.lower() for word in words)
    if case_style == "camelCase":
        return words[0].lower() + "".join(_capitalize(word) for word in words[1:])
    return "".join(_capitalize(word) for word in words)


__all__ = ["format_case_style"]
