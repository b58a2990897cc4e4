"""Graph algorithms for fallback inheritance chains."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

PLATFORM_NODE_PREFIX = "platform:"
GUIDE_NODE_PREFIX = "guide:"


def platform_node(key: str) -> str:
    return f"{PLATFORM_NODE_PREFIX}{key}"


def guide_node(key: str) -> str:
    return f"{GUIDE_NODE_PREFIX}{key}"


def build_fallback_graph(
    platform_fallbacks: Mapping[str, str | None],
    guide_fallbacks: Mapping[str, str | None],
) -> dict[str, set[str]]:
    """Build the directed fallback graph.

    Platforms and guides live in separate key namespaces, so nodes are
    prefixed (``platform:javascript``, ``guide:javascript.node``).
    Integrations share the guide namespace.

    Args:
        platform_fallbacks: Platform key -> resolved fallbackPlatform key
        guide_fallbacks: Guide/integration key -> resolved fallbackGuide key

    Returns:
        Mapping of node -> set of nodes it inherits from. Every entity is a
        node, including those without a fallback.
    """
    graph: dict[str, set[str]] = {}

    for key, target in platform_fallbacks.items():
        graph[platform_node(key)] = {platform_node(target)} if target else set()

    for key, target in guide_fallbacks.items():
        graph[guide_node(key)] = {guide_node(target)} if target else set()

    return graph


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []


def _extract_scc(state: _TarjanState, root: str) -> list[str]:
    """Extract a strongly connected component from the stack."""
    scc: list[str] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    return scc


def _strongconnect(
    node: str, graph: Mapping[str, set[str]], state: _TarjanState
) -> None:
    """Process a node in Tarjan's algorithm."""
    state.indices[node] = state.index
    state.low_link[node] = state.index
    state.index += 1
    state.stack.append(node)
    state.on_stack.add(node)

    for neighbor in sorted(graph.get(node, set())):
        if neighbor not in state.indices:
            _strongconnect(neighbor, graph, state)
            state.low_link[node] = min(state.low_link[node], state.low_link[neighbor])
        elif neighbor in state.on_stack:
            state.low_link[node] = min(state.low_link[node], state.indices[neighbor])

    if state.low_link[node] == state.indices[node]:
        scc = _extract_scc(state, node)
        if len(scc) > 1 or node in graph.get(node, set()):
            state.sccs.append(sorted(scc))


def find_cycles(graph: Mapping[str, set[str]]) -> list[list[str]]:
    """Find fallback cycles using Tarjan's algorithm.

    A cycle is a strongly connected component with more than one node, or a
    node that falls back to itself.

    Returns:
        Cycles as sorted node lists, ordered by their first node.
    """
    state = _TarjanState()

    for node in sorted(graph):
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return sorted(state.sccs)


__all__ = [
    "build_fallback_graph",
    "find_cycles",
    "guide_node",
    "platform_node",
]
