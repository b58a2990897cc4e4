"""Keyed lookup over resolved platforms.

Back-references (``PlatformGuide.platform``) are plain keys; this registry is
where they get turned back into objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from artifacts.models.artifacts.platforms import (
        ChildEntry,
        Platform,
        PlatformGuide,
        PlatformIntegration,
    )


class PlatformRegistry:
    """Read-only index of platforms, guides and integrations by key."""

    def __init__(self, platforms: Iterable[Platform]) -> None:
        self._platforms: dict[str, Platform] = {}
        self._aliases: dict[str, str] = {}
        self._entries: dict[str, ChildEntry] = {}

        for platform in platforms:
            if platform.key in self._platforms:
                msg = f"Duplicate platform key '{platform.key}'"
                raise ValueError(msg)
            self._platforms[platform.key] = platform
            for child in [*platform.guides, *platform.integrations]:
                if child.key in self._entries:
                    msg = f"Duplicate guide or integration key '{child.key}'"
                    raise ValueError(msg)
                self._entries[child.key] = child

        for platform in self._platforms.values():
            for alias in platform.aliases or []:
                if alias not in self._platforms:
                    self._aliases.setdefault(alias, platform.key)

    def platform(self, key: str) -> Platform:
        """Return a platform by key or alias."""
        if key in self._platforms:
            return self._platforms[key]
        if key in self._aliases:
            return self._platforms[self._aliases[key]]
        raise KeyError(key)

    def entry(self, key: str) -> ChildEntry:
        """Return a guide or integration by fully qualified key."""
        return self._entries[key]

    def lookup(self, key: str) -> Platform | ChildEntry:
        """Return the platform, guide or integration that ``key`` names."""
        if key in self._entries:
            return self._entries[key]
        return self.platform(key)

    def owner(self, entry: ChildEntry) -> Platform:
        """Return the platform a guide or integration belongs to."""
        return self._platforms[entry.platform]

    def guides_for(self, key: str) -> list[PlatformGuide]:
        return list(self.platform(key).guides)

    def integrations_for(self, key: str) -> list[PlatformIntegration]:
        return list(self.platform(key).integrations)

    def platforms(self) -> list[Platform]:
        return list(self._platforms.values())

    def entries(self) -> Iterator[Platform | ChildEntry]:
        """Iterate every entity: each platform, then its guides and integrations."""
        for platform in self._platforms.values():
            yield platform
            yield from platform.guides
            yield from platform.integrations

    def __contains__(self, key: object) -> bool:
        return key in self._platforms or key in self._entries or key in self._aliases

    def __len__(self) -> int:
        return len(self._platforms) + len(self._entries)


__all__ = ["PlatformRegistry"]
