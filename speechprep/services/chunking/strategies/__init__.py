"""Chunking strategy implementations, keyed by chunking mode."""

from typing import Callable

from speechprep.config.chunking.models import ChunkingRules
from speechprep.services.chunking.strategies.custom_rules import chunk_custom
from speechprep.services.chunking.strategies.preset import preset_chunks

STRATEGY_REGISTRY: dict[str, Callable[[str, ChunkingRules], list[str]]] = {
    "preset": preset_chunks,
    "custom": chunk_custom,
}


def get_strategy_fn(mode: str):
    """Return the chunking function for the given mode, or None."""
    return STRATEGY_REGISTRY.get(mode)
