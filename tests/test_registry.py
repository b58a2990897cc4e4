from __future__ import annotations

import pytest

from artifacts.models.artifacts.platforms import (
    Platform,
    PlatformGuide,
    PlatformIntegration,
)
from resolve.registry import PlatformRegistry


def _registry() -> PlatformRegistry:
    node = PlatformGuide(
        key="javascript.node",
        name="node",
        platform="javascript",
        url="/platforms/javascript/guides/node/",
    )
    vue = PlatformIntegration(
        key="javascript.vue",
        name="vue",
        platform="javascript",
        url="/platforms/javascript/integrations/vue/",
        icon="vue",
    )
    javascript = Platform(
        key="javascript",
        name="javascript",
        url="/platforms/javascript/",
        aliases=["js", "python"],
        guides=[node],
        integrations=[vue],
    )
    python = Platform(key="python", name="python", url="/platforms/python/")
    return PlatformRegistry([javascript, python])


def test_platform_lookup_by_key_and_alias() -> None:
    registry = _registry()

    assert registry.platform("javascript").key == "javascript"
    assert registry.platform("js").key == "javascript"
    with pytest.raises(KeyError):
        registry.platform("ruby")


def test_alias_never_shadows_a_platform_key() -> None:
    assert _registry().platform("python").key == "python"


def test_entry_and_owner() -> None:
    registry = _registry()

    node = registry.entry("javascript.node")
    assert node.type == "guide"
    assert registry.owner(node).key == "javascript"
    assert registry.lookup("javascript.vue").type == "integration"
    assert registry.lookup("js").type == "platform"


def test_guides_and_integrations_for() -> None:
    registry = _registry()

    assert [g.key for g in registry.guides_for("js")] == ["javascript.node"]
    assert [i.key for i in registry.integrations_for("javascript")] == [
        "javascript.vue"
    ]
    assert registry.guides_for("python") == []


def test_entries_len_and_contains() -> None:
    registry = _registry()

    assert [entry.key for entry in registry.entries()] == [
        "javascript",
        "javascript.node",
        "javascript.vue",
        "python",
    ]
    assert len(registry) == 4
    assert "js" in registry
    assert "javascript.node" in registry
    assert "node" not in registry


def test_duplicate_platform_keys_rejected() -> None:
    python = Platform(key="python", name="python", url="/platforms/python/")

    with pytest.raises(ValueError, match="Duplicate platform key 'python'"):
        PlatformRegistry([python, python])
