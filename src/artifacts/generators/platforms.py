"""Platform tree artifact generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.search import PlatformsDocument
from artifacts.utils import _to_dict, _write_json
from contract.artifacts import PLATFORMS_JSON

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from artifacts.models.artifacts.platforms import Platform


class PlatformsGenerator:
    """Generates platforms.json from resolved platforms."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "platforms"

    def generate(
        self,
        out_dir: Path,
        platforms: Sequence[Platform],
    ) -> tuple[dict[str, Any], dict[str, int]]:
        """Write the full platform tree, platforms sorted by key."""
        out_dir.mkdir(parents=True, exist_ok=True)

        document = PlatformsDocument(
            platforms=sorted(platforms, key=lambda platform: platform.key)
        )
        _write_json(out_dir / PLATFORMS_JSON, document)

        summary = {
            "platform_count": len(document.platforms),
            "guide_count": sum(len(p.guides) for p in document.platforms),
            "integration_count": sum(
                len(p.integrations) for p in document.platforms
            ),
        }
        return _to_dict(document), summary


__all__ = ["PLATFORMS_JSON", "PlatformsGenerator"]
