"""Search index artifact generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.search import SearchRecord
from artifacts.utils import _to_dict, _write_jsonl
from contract.artifacts import SEARCH_INDEX_JSONL

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from pathlib import Path

    from artifacts.models.artifacts.platforms import ChildEntry, Platform


def _platform_record(platform: Platform) -> SearchRecord:
    return SearchRecord(
        key=platform.key,
        type=platform.type,
        platform=platform.key,
        title=platform.title or platform.platform_title or platform.key,
        url=platform.url,
        keywords=platform.keywords or [],
        aliases=platform.aliases or [],
        sdk=platform.sdk,
        icon=platform.icon,
    )


def _child_record(entry: ChildEntry) -> SearchRecord:
    return SearchRecord(
        key=entry.key,
        type=entry.type,
        platform=entry.platform,
        title=entry.title or entry.name,
        url=entry.url,
        keywords=entry.keywords or [],
        aliases=entry.aliases or [],
        sdk=entry.sdk,
        icon=entry.icon,
    )


def build_search_records(platforms: Iterable[Platform]) -> Iterator[SearchRecord]:
    """Yield one search record per platform, guide and integration.

    Integrations are only indexed when their platform sets
    ``showIntegrationsInSearch``. Records are ordered by platform key, then
    platform, guides and integrations, each group by key.
    """
    for platform in sorted(platforms, key=lambda p: p.key):
        yield _platform_record(platform)
        for guide in sorted(platform.guides, key=lambda g: g.key):
            yield _child_record(guide)
        if platform.show_integrations_in_search:
            for integration in sorted(platform.integrations, key=lambda i: i.key):
                yield _child_record(integration)


class SearchIndexGenerator:
    """Generates search_index.jsonl from resolved platforms."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "search_index"

    def generate(
        self,
        out_dir: Path,
        platforms: Sequence[Platform],
    ) -> tuple[list[dict[str, Any]], dict[str, int]]:
        out_dir.mkdir(parents=True, exist_ok=True)

        records = list(build_search_records(platforms))
        _write_jsonl(out_dir / SEARCH_INDEX_JSONL, records)

        record_dicts = [_to_dict(record) for record in records]
        return record_dicts, {"search_record_count": len(records)}


__all__ = ["SEARCH_INDEX_JSONL", "SearchIndexGenerator", "build_search_records"]
