"""Shared utilities for platform keys and URLs."""

from __future__ import annotations

KEY_SEPARATOR = "."


def qualify_key(platform: str, name: str) -> str:
    """Build the fully qualified key of a guide or integration.

    Examples:
        >>> qualify_key("javascript", "express")
        'javascript.express'
    """
    return f"{platform}{KEY_SEPARATOR}{name}"


def split_key(key: str) -> tuple[str, str | None]:
    """Split an entry key into ``(platform, name)``.

    Platform keys carry no separator and yield ``(key, None)``.

    Examples:
        >>> split_key("javascript.express")
        ('javascript', 'express')
        >>> split_key("python")
        ('python', None)
    """
    platform, sep, name = key.partition(KEY_SEPARATOR)
    if not sep:
        return platform, None
    return platform, name


def build_url(url_prefix: str, *segments: str) -> str:
    """Join URL segments into a relative docs path with a trailing slash.

    Examples:
        >>> build_url("/platforms", "javascript", "guides", "express")
        '/platforms/javascript/guides/express/'
        >>> build_url("platforms/", "python")
        '/platforms/python/'
    """
    parts = [part.strip("/") for part in (url_prefix, *segments)]
    path = "/".join(part for part in parts if part)
    return f"/{path}/" if path else "/"
