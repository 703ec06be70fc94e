"""Filter normalisation, link-graph traversal and buffer reversal for soundboards."""

from __future__ import annotations

from .buffers import AudioBuffer, ChannelLengthError, reverse_buffer
from .filters import SoundboardFilterConfig, normalize_filters
from .graph import GraphNode, LinkPair, PlaybackStep, build_link_graph, connected_set, sequential_steps

__all__ = [
    "AudioBuffer",
    "ChannelLengthError",
    "GraphNode",
    "LinkPair",
    "PlaybackStep",
    "SoundboardFilterConfig",
    "build_link_graph",
    "connected_set",
    "normalize_filters",
    "reverse_buffer",
    "sequential_steps",
]
