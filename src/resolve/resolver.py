"""Resolution of platform source directories into resolved platform entities.

Resolution runs in stages: scan and parse every source directory, check
cross-entity consistency (duplicate keys, alias collisions, dangling
fallback references, fallback cycles), then merge configs along their
fallback chains and build the final models.

Merge precedence for a platform: own fields, then its ``fallbackPlatform``
chain. For a guide or integration: own fields, then its ``fallbackGuide``
chain, then ``PLATFORM_INHERITED_FIELDS`` from the owning platform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar, cast

from pydantic import ValidationError

from artifacts.models.artifacts.platforms import (
    GuideConfig,
    Platform,
    PlatformConfig,
    PlatformGuide,
    PlatformIntegration,
)
from graph.algos import build_fallback_graph, find_cycles
from parse.sources import load_source_config
from rules.config import load_config, resolve_platforms_dir
from scan.files import GUIDES_DIR, INTEGRATIONS_DIR, SourceDir, find_platform_sources
from utils import KEY_SEPARATOR, build_url, qualify_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from artifacts.models.artifacts.platforms import ChildEntry
    from rules.config import MissingFallbackBehavior, PlatformDocsConfig

logger = logging.getLogger(__name__)

PLATFORM_INHERITED_FIELDS: tuple[str, ...] = (
    "case_style",
    "language",
    "sdk",
    "support_level",
    "categories",
)

# Identity and fallback pointers belong to one entity and are never inherited.
_NON_INHERITED_FIELDS = frozenset({"aliases", "fallback_platform", "fallback_guide"})

ConfigT = TypeVar("ConfigT", bound=PlatformConfig)


class ResolutionError(Exception):
    """Raised when sources are valid one by one but inconsistent together."""


@dataclass(frozen=True)
class LoadedSource:
    source: SourceDir
    config: PlatformConfig


def merge_config(
    own: ConfigT,
    inherited: PlatformConfig | None,
    *,
    fields: Iterable[str] | None = None,
) -> ConfigT:
    """Fill the fields unset on ``own`` from ``inherited``.

    Own values always win. Aliases and fallback pointers are never inherited.

    Args:
        own: The config being resolved
        inherited: The already-resolved config to take values from
        fields: Field names to consider (default: every PlatformConfig field)
    """
    if inherited is None:
        return own

    names = PlatformConfig.model_fields if fields is None else fields
    updates: dict[str, object] = {}
    for name in names:
        if name in _NON_INHERITED_FIELDS or getattr(own, name) is not None:
            continue
        value = getattr(inherited, name, None)
        if value is not None:
            updates[name] = value

    if not updates:
        return own
    return own.model_copy(update=updates)


def load_sources(
    root: Path, config: PlatformDocsConfig
) -> tuple[dict[str, LoadedSource], dict[str, LoadedSource]]:
    """Scan and parse every source directory.

    Returns:
        ``(platforms, children)`` keyed by platform key and by fully
        qualified guide/integration key, in scan order.
    """
    platforms_dir = resolve_platforms_dir(root, config.platforms_dir)
    if not platforms_dir.is_dir():
        msg = f"Platforms directory does not exist: {platforms_dir}"
        raise ResolutionError(msg)

    platforms: dict[str, LoadedSource] = {}
    children: dict[str, LoadedSource] = {}

    for source in find_platform_sources(
        root,
        platforms_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        loaded = LoadedSource(source=source, config=load_source_config(source))
        if source.kind == "platform":
            platforms[source.key] = loaded
            continue

        existing = children.get(source.key)
        if existing is not None:
            msg = (
                f"Duplicate key '{source.key}': "
                f"{existing.source.path} and {source.path}"
            )
            raise ResolutionError(msg)
        children[source.key] = loaded

    logger.debug(
        "Loaded %d platform and %d guide/integration sources from %s",
        len(platforms),
        len(children),
        platforms_dir,
    )
    return platforms, children


def _check_aliases(platforms: Mapping[str, LoadedSource]) -> None:
    owners: dict[str, str] = {key: key for key in platforms}
    for key, loaded in platforms.items():
        for alias in loaded.config.aliases or []:
            existing = owners.get(alias)
            if existing is not None and existing != key:
                msg = (
                    f"Alias '{alias}' of platform '{key}' collides with "
                    f"platform '{existing}'"
                )
                raise ResolutionError(msg)
            owners[alias] = key


def lookup_guide_key(
    reference: str, platform: str, known: Mapping[str, object]
) -> str | None:
    """Resolve a fallbackGuide reference to a known guide/integration key.

    Qualified references (``javascript.node``) are looked up as-is; bare
    names (``node``) are looked up under the referencing entry's platform.
    """
    if KEY_SEPARATOR in reference:
        return reference if reference in known else None
    qualified = qualify_key(platform, reference)
    return qualified if qualified in known else None


def _resolve_references(
    platforms: Mapping[str, LoadedSource],
    children: Mapping[str, LoadedSource],
    *,
    on_missing: MissingFallbackBehavior,
) -> tuple[dict[str, str | None], dict[str, str | None]]:
    problems: list[str] = []

    platform_targets: dict[str, str | None] = {}
    for key, loaded in platforms.items():
        target = loaded.config.fallback_platform
        if target is not None and target not in platforms:
            problems.append(
                f"Platform '{key}' falls back to unknown platform '{target}'"
            )
            target = None
        platform_targets[key] = target

    guide_targets: dict[str, str | None] = {}
    for key, loaded in children.items():
        reference = cast("GuideConfig", loaded.config).fallback_guide
        target = None
        if reference is not None:
            target = lookup_guide_key(reference, loaded.source.platform, children)
            if target is None:
                problems.append(
                    f"{loaded.source.kind.capitalize()} '{key}' falls back to "
                    f"unknown guide '{reference}'"
                )
        guide_targets[key] = target

    if problems and on_missing == "error":
        msg = "Unresolved fallback references:\n" + "\n".join(
            f"  {problem}" for problem in problems
        )
        raise ResolutionError(msg)

    for problem in problems:
        logger.warning("%s; ignoring the fallback", problem)

    return platform_targets, guide_targets


def _check_cycles(
    platform_targets: Mapping[str, str | None],
    guide_targets: Mapping[str, str | None],
) -> None:
    cycles = find_cycles(build_fallback_graph(platform_targets, guide_targets))
    if cycles:
        rendered = "\n".join(f"  {', '.join(cycle)}" for cycle in cycles)
        msg = f"Fallback cycles detected:\n{rendered}"
        raise ResolutionError(msg)


class _Resolver:
    """Merges configs along fallback chains and builds the final models.

    Assumes references were checked and cycles rejected beforehand.
    """

    def __init__(
        self,
        platforms: Mapping[str, LoadedSource],
        children: Mapping[str, LoadedSource],
        platform_targets: Mapping[str, str | None],
        guide_targets: Mapping[str, str | None],
        url_prefix: str,
    ) -> None:
        self._platforms = platforms
        self._children = children
        self._platform_targets = platform_targets
        self._guide_targets = guide_targets
        self._url_prefix = url_prefix
        self._platform_cache: dict[str, PlatformConfig] = {}
        self._guide_cache: dict[str, GuideConfig] = {}

        self._children_by_platform: dict[str, list[str]] = {
            key: [] for key in platforms
        }
        for key, loaded in children.items():
            self._children_by_platform[loaded.source.platform].append(key)

    def platform_config(self, key: str) -> PlatformConfig:
        cached = self._platform_cache.get(key)
        if cached is not None:
            return cached

        resolved = self._platforms[key].config
        target = self._platform_targets[key]
        if target is not None:
            resolved = merge_config(resolved, self.platform_config(target))
        if resolved.fallback_platform != target:
            resolved = resolved.model_copy(update={"fallback_platform": target})

        self._platform_cache[key] = resolved
        return resolved

    def guide_config(self, key: str) -> GuideConfig:
        cached = self._guide_cache.get(key)
        if cached is not None:
            return cached

        loaded = self._children[key]
        resolved = cast("GuideConfig", loaded.config)
        target = self._guide_targets[key]
        if target is not None:
            resolved = merge_config(resolved, self.guide_config(target))
        resolved = merge_config(
            resolved,
            self.platform_config(loaded.source.platform),
            fields=PLATFORM_INHERITED_FIELDS,
        )
        if resolved.fallback_guide != target:
            resolved = resolved.model_copy(update={"fallback_guide": target})

        self._guide_cache[key] = resolved
        return resolved

    def build_child(self, key: str) -> ChildEntry:
        source = self._children[key].source
        fields = self.guide_config(key).model_dump(exclude_none=True)

        if source.kind == "guide":
            model: type[PlatformGuide] | type[PlatformIntegration] = PlatformGuide
            url = build_url(
                self._url_prefix, source.platform, GUIDES_DIR, source.name
            )
        else:
            model = PlatformIntegration
            url = build_url(
                self._url_prefix, source.platform, INTEGRATIONS_DIR, source.name
            )

        try:
            return model(
                key=key,
                name=source.name,
                platform=source.platform,
                url=url,
                **fields,
            )
        except ValidationError as exc:
            msg = f"Invalid {source.kind} '{key}' ({source.path}): {exc}"
            raise ResolutionError(msg) from exc

    def build_platform(self, key: str) -> Platform:
        guides: list[PlatformGuide] = []
        integrations: list[PlatformIntegration] = []
        for child_key in self._children_by_platform[key]:
            child = self.build_child(child_key)
            if isinstance(child, PlatformGuide):
                guides.append(child)
            else:
                integrations.append(child)

        fields = self.platform_config(key).model_dump(exclude_none=True)
        try:
            return Platform(
                key=key,
                name=key,
                url=build_url(self._url_prefix, key),
                guides=guides,
                integrations=integrations,
                **fields,
            )
        except ValidationError as exc:
            path = self._platforms[key].source.path
            msg = f"Invalid platform '{key}' ({path}): {exc}"
            raise ResolutionError(msg) from exc


def resolve_sources(
    platforms: Mapping[str, LoadedSource],
    children: Mapping[str, LoadedSource],
    *,
    url_prefix: str = "/platforms",
    on_missing_fallback: MissingFallbackBehavior = "error",
) -> list[Platform]:
    """Resolve already-loaded sources into platforms sorted by key."""
    _check_aliases(platforms)
    platform_targets, guide_targets = _resolve_references(
        platforms, children, on_missing=on_missing_fallback
    )
    _check_cycles(platform_targets, guide_targets)

    resolver = _Resolver(
        platforms, children, platform_targets, guide_targets, url_prefix
    )
    return [resolver.build_platform(key) for key in sorted(platforms)]


def resolve_platforms(
    root: Path, *, config: PlatformDocsConfig | None = None
) -> list[Platform]:
    """Load and resolve every platform under the configured platforms_dir.

    Args:
        root: Docs root (holds platformdocs.toml and .gitignore)
        config: Optional configuration; loaded from root when omitted

    Returns:
        Resolved platforms sorted by key, each carrying its guides and
        integrations sorted by name.

    Raises:
        ConfigError: If the configuration is invalid.
        SourceError: If a config.yml or index.mdx is malformed.
        ResolutionError: On duplicate keys, alias collisions, dangling
            fallbacks (unless configured to warn), fallback cycles, or an
            entity that fails validation after merging.
    """
    if config is None:
        config = load_config(root)

    platforms, children = load_sources(root, config)
    resolved = resolve_sources(
        platforms,
        children,
        url_prefix=config.url_prefix,
        on_missing_fallback=config.on_missing_fallback,
    )
    logger.info("Resolved %d platforms", len(resolved))
    return resolved


__all__ = [
    "PLATFORM_INHERITED_FIELDS",
    "LoadedSource",
    "ResolutionError",
    "load_sources",
    "lookup_guide_key",
    "merge_config",
    "resolve_platforms",
    "resolve_sources",
]
