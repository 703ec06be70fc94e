"""Runtime settings and board snapshot loading."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .filters import SoundboardFilterConfig, normalize_filters
from .graph import GraphNode, LinkPair, build_link_graph
from .state import NODE_KINDS

_DIAGNOSTICS_ENV = "ECHOCORE_DIAGNOSTICS"
_LOG_PATH_ENV = "ECHOCORE_LOG_PATH"
DEFAULT_LOG_PATH = Path("logs/echocore_calls.log")


@dataclass(frozen=True)
class RuntimeConfig:
    """Process-wide settings read from the environment."""

    diagnostics: bool = False
    log_path: Path = DEFAULT_LOG_PATH


@lru_cache(maxsize=1)
def get_runtime_config() -> RuntimeConfig:
    diagnostics = os.environ.get(_DIAGNOSTICS_ENV, "").strip().lower() in {"1", "true", "yes", "on"}
    log_path = os.environ.get(_LOG_PATH_ENV, "").strip()
    return RuntimeConfig(
        diagnostics=diagnostics,
        log_path=Path(log_path) if log_path else DEFAULT_LOG_PATH,
    )


@dataclass(slots=True)
class BoardConfig:
    """Item kinds, normalised soundboard filters and the link graph of a board."""

    kinds: Dict[str, str]
    filters: Dict[str, SoundboardFilterConfig]
    links: List[LinkPair]
    graph: Dict[str, GraphNode] = field(default_factory=dict)


def _normalise_items(data: Any) -> tuple[Dict[str, str], Dict[str, SoundboardFilterConfig]]:
    if not isinstance(data, Mapping):
        raise ValueError("board.items must be an object keyed by item id")
    kinds: Dict[str, str] = {}
    filters: Dict[str, SoundboardFilterConfig] = {}
    for item_id, item in data.items():
        if not isinstance(item, Mapping):
            raise ValueError(f"board.items[{item_id!r}] must be an object")
        kind = item.get("type")
        if kind not in NODE_KINDS:
            raise ValueError(f"board.items[{item_id!r}].type must be one of {list(NODE_KINDS)}, got {kind!r}")
        kinds[str(item_id)] = kind
        if kind == "soundboard":
            filters[str(item_id)] = normalize_filters(item.get("filters"))
    return kinds, filters


def _normalise_links(data: Any) -> List[LinkPair]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("board.links must be a list")
    links = []
    for index, item in enumerate(data):
        if not isinstance(item, Mapping) or "itemA" not in item or "itemB" not in item:
            raise ValueError(f"board.links[{index}] must provide itemA and itemB")
        links.append(LinkPair(item_a=str(item["itemA"]), item_b=str(item["itemB"])))
    return links


def parse_board(raw: Any, *, soundboards_only: bool = True) -> BoardConfig:
    """Build a :class:`BoardConfig` from decoded JSON."""

    if not isinstance(raw, Mapping):
        raise ValueError("board snapshot must be a JSON object")
    kinds, filters = _normalise_items(raw.get("items", {}))
    links = _normalise_links(raw.get("links"))
    graph = build_link_graph(
        kinds,
        links,
        kinds=("soundboard",) if soundboards_only else None,
    )
    return BoardConfig(kinds=kinds, filters=filters, links=links, graph=graph)


def load_board(path: str | Path, *, soundboards_only: bool = True) -> BoardConfig:
    """Load a :class:`BoardConfig` from the JSON snapshot at ``path``."""

    with open(path, "r", encoding="utf8") as fh:
        raw = json.load(fh)
    return parse_board(raw, soundboards_only=soundboards_only)


__all__ = [
    "BoardConfig",
    "DEFAULT_LOG_PATH",
    "RuntimeConfig",
    "get_runtime_config",
    "load_board",
    "parse_board",
]
