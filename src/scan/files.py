"""Directory scanning for platform, guide and integration sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatch
from typing import TYPE_CHECKING, Literal, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from utils import qualify_key

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_YML = "config.yml"
INDEX_MDX = "index.mdx"
GUIDES_DIR = "guides"
INTEGRATIONS_DIR = "integrations"

SourceKind = Literal["platform", "guide", "integration"]

_CHILD_DIRS: tuple[tuple[str, SourceKind], ...] = (
    (GUIDES_DIR, "guide"),
    (INTEGRATIONS_DIR, "integration"),
)


@dataclass(frozen=True)
class SourceDir:
    """A directory holding a config.yml and/or index.mdx for one entity.

    ``files`` lists the source files that passed the symlink and gitignore
    checks; only these are read.
    """

    kind: SourceKind
    platform: str
    name: str
    path: Path
    files: tuple[Path, ...] = ()

    @property
    def key(self) -> str:
        if self.kind == "platform":
            return self.platform
        return qualify_key(self.platform, self.name)

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_YML

    @property
    def index_path(self) -> Path:
        return self.path / INDEX_MDX


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _source_files(
    directory: Path,
    gitignore_matches: Callable[[str], bool] | None,
) -> list[Path]:
    """Return the config.yml / index.mdx files in directory that count."""
    found: list[Path] = []
    for filename in (CONFIG_YML, INDEX_MDX):
        path = directory / filename
        if not path.is_file() or path.is_symlink():
            continue
        if gitignore_matches is not None and gitignore_matches(str(path)):
            continue
        found.append(path)
    return found


def _matches_include(rel_path_str: str, include_patterns: list[str]) -> bool:
    """Match a platform-relative path against include globs.

    A platform directory also matches when the first segment of a pattern
    does, so `javascript/guides/*` keeps the `javascript` platform its
    guides belong to.
    """
    if any(fnmatch(rel_path_str, pat) for pat in include_patterns):
        return True
    if "/" in rel_path_str:
        return False
    return any(fnmatch(rel_path_str, pat.split("/", 1)[0]) for pat in include_patterns)


def _should_include_dir(
    path: Path,
    platforms_dir: Path,
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a source directory should be included based on all filtering rules."""
    if not path.is_dir() or path.is_symlink():
        return False

    if path.name.startswith((".", "_")):
        return False

    if not _is_within_root(path, platforms_dir):
        return False

    rel_path_str = path.relative_to(platforms_dir).as_posix()

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not _matches_include(rel_path_str, include_patterns):
        return False

    if exclude_patterns and any(fnmatch(rel_path_str, pat) for pat in exclude_patterns):
        return False

    if not _source_files(path, gitignore_matches):
        logger.debug("Skipping %s: no %s or %s", rel_path_str, CONFIG_YML, INDEX_MDX)
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def _iter_subdirs(directory: Path) -> list[Path]:
    if not directory.is_dir() or directory.is_symlink():
        return []
    return sorted(
        (path for path in directory.iterdir() if path.is_dir()),
        key=lambda p: p.name,
    )


def find_platform_sources(
    root: Path,
    platforms_dir: Path,
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[SourceDir]:
    """Find platform, guide and integration source directories.

    Args:
        root: Docs root; .gitignore files are read from here
        platforms_dir: Directory holding one subdirectory per platform
        include_patterns: Optional list of fnmatch patterns matched against
            the path relative to platforms_dir; if provided, directories must
            match at least one pattern to be included. A platform is kept when
            the first segment of a pattern matches it, so its guides can be
            selected on their own
        exclude_patterns: Optional list of fnmatch patterns; directories
            matching any pattern are excluded
        nested_gitignore: Compose every .gitignore under root, not just the
            root one

    Yields:
        SourceDir records ordered by platform name; each platform is followed
        by its guides and then its integrations, each sorted by name. Guides
        and integrations of a skipped platform are skipped too.
    """
    gitignore_matches = _build_gitignore_matcher(
        root,
        nested_gitignore=nested_gitignore,
    )

    def include(path: Path) -> bool:
        return _should_include_dir(
            path,
            platforms_dir,
            gitignore_matches,
            include_patterns,
            exclude_patterns,
        )

    for platform_path in _iter_subdirs(platforms_dir):
        if not include(platform_path):
            continue
        platform = platform_path.name
        yield SourceDir(
            kind="platform",
            platform=platform,
            name=platform,
            path=platform_path,
            files=tuple(_source_files(platform_path, gitignore_matches)),
        )

        for child_dir, kind in _CHILD_DIRS:
            for child_path in _iter_subdirs(platform_path / child_dir):
                if include(child_path):
                    yield SourceDir(
                        kind=kind,
                        platform=platform,
                        name=child_path.name,
                        path=child_path,
                        files=tuple(_source_files(child_path, gitignore_matches)),
                    )


__all__ = [
    "CONFIG_YML",
    "INDEX_MDX",
    "SourceDir",
    "SourceKind",
    "_should_include_dir",
    "find_platform_sources",
]
