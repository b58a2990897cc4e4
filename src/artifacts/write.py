from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.generators import PlatformsGenerator, SearchIndexGenerator
from contract.artifacts import PLATFORMS_JSON, SEARCH_INDEX_JSONL
from resolve.resolver import resolve_platforms
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import PlatformDocsConfig

logger = logging.getLogger(__name__)


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: PlatformDocsConfig | None = None,
) -> dict[str, object]:
    """Resolve the platform tree and write its artifacts.

    Args:
        root: Docs root holding platformdocs.toml and the platform tree
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from root when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    platforms = resolve_platforms(root, config=config)

    platforms_gen = PlatformsGenerator()
    _, platform_summary = platforms_gen.generate(out_dir, platforms)

    search_gen = SearchIndexGenerator()
    _, search_summary = search_gen.generate(out_dir, platforms)

    artifacts_list = [PLATFORMS_JSON, SEARCH_INDEX_JSONL]
    logger.info("Wrote %s to %s", ", ".join(artifacts_list), out_dir)

    return {
        **platform_summary,
        **search_summary,
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
