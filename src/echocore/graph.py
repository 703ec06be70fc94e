"""Reachability and playback ordering over the soundboard link graph."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from .diagnostics import call_logging_enabled, log_call
from .state import NODE_KINDS


@dataclass(slots=True)
class GraphNode:
    """Soundboard or textbox item with its ordered outgoing link ids."""

    id: str
    kind: str = "soundboard"
    links: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.kind = str(self.kind)
        if self.kind not in NODE_KINDS:
            raise ValueError(f"Unknown node kind '{self.kind}' for node '{self.id}'")
        self.links = tuple(str(link) for link in self.links)


@dataclass(frozen=True, slots=True)
class PlaybackStep:
    """One newly visited node in breadth-first order.

    ``parent_id`` is ``None`` for the start node (the synthetic root).
    """

    id: str
    parent_id: str | None
    depth: int


@dataclass(frozen=True, slots=True)
class LinkPair:
    item_a: str
    item_b: str


Graph = Mapping[str, GraphNode]


def _neighbours(graph: Graph, node_id: str) -> Iterable[str]:
    node = graph.get(node_id)
    if node is None:
        return ()
    return node.links


def _walk(graph: Graph, start: str) -> List[PlaybackStep]:
    if start not in graph:
        return []
    steps = [PlaybackStep(id=start, parent_id=None, depth=0)]
    visited: Set[str] = {start}
    queue: Deque[PlaybackStep] = deque(steps)
    while queue:
        current = queue.popleft()
        for neighbour in _neighbours(graph, current.id):
            if neighbour in visited:
                continue
            if neighbour not in graph:
                if call_logging_enabled():
                    log_call(f"[graph] {current.id} links to missing node {neighbour!r}; skipped")
                continue
            visited.add(neighbour)
            step = PlaybackStep(id=neighbour, parent_id=current.id, depth=current.depth + 1)
            steps.append(step)
            queue.append(step)
    return steps


def connected_set(graph: Graph, start: str) -> Set[str]:
    """Return every id reachable from ``start`` along link lists, ``start`` included.

    Empty when ``start`` is not in ``graph``.
    """

    return {step.id for step in _walk(graph, start)}


def sequential_steps(graph: Graph, start: str) -> List[PlaybackStep]:
    """Return the breadth-first visitation order from ``start``.

    Each node appears once, at its first discovery; ties within a depth follow
    the declared link order of the discovering parents.
    """

    return _walk(graph, start)


def build_link_graph(
    items: Mapping[str, str],
    links: Sequence[LinkPair],
    *,
    kinds: Iterable[str] | None = None,
    undirected: bool = True,
) -> Dict[str, GraphNode]:
    """Build an id -> :class:`GraphNode` mapping from item kinds and link pairs.

    ``items`` maps each id to its kind.  When ``kinds`` is given, only items of
    those kinds become nodes and links touching any other item are dropped.
    Neighbour order follows first declaration; duplicate links collapse.
    """

    allowed = None if kinds is None else frozenset(kinds)
    adjacency: Dict[str, Dict[str, None]] = {}
    node_kinds: Dict[str, str] = {}
    for item_id, kind in items.items():
        if allowed is not None and kind not in allowed:
            continue
        node_kinds[str(item_id)] = kind
        adjacency[str(item_id)] = {}

    for pair in links:
        a, b = str(pair.item_a), str(pair.item_b)
        if a not in adjacency or b not in adjacency:
            if call_logging_enabled():
                log_call(f"[graph] link {a!r} <-> {b!r} dropped")
            continue
        adjacency[a].setdefault(b, None)
        if undirected:
            adjacency[b].setdefault(a, None)

    return {
        item_id: GraphNode(id=item_id, kind=node_kinds[item_id], links=tuple(neighbours))
        for item_id, neighbours in adjacency.items()
    }


__all__ = [
    "Graph",
    "GraphNode",
    "LinkPair",
    "PlaybackStep",
    "build_link_graph",
    "connected_set",
    "sequential_steps",
]
