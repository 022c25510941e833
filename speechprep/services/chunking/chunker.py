"""
Chunker: takes normalized text + chunking config and returns ordered chunks.
Pure and deterministic; prepare_document wraps it with normalization, stats
and chunk records for callers that synthesize the chunks one by one.
"""

import hashlib
import json
from typing import Any

from speechprep.config.chunking.models import ChunkingConfig, ChunkingRules
from speechprep.config.logging import get_logger
from speechprep.services.chunking.cleaners import normalize_text, strip_frontmatter
from speechprep.services.chunking.headings import compile_matcher
from speechprep.services.chunking.stats import estimate_cost, get_text_stats
from speechprep.services.chunking.strategies import get_strategy_fn
from speechprep.utils.ids import generate_chunk_id, generate_document_id

logger = get_logger(__name__)


def chunk_text(text: str, config: ChunkingConfig) -> list[str]:
    """Chunk normalized text under config.mode. Blank text gives []."""
    if not text.strip():
        return []
    strategy_fn = get_strategy_fn(config.mode)
    if strategy_fn is None:
        raise ValueError(f"Unknown chunking mode: {config.mode!r}")
    return strategy_fn(text, config.effective_rules())


def compute_chunk_hash(chunk_text: str, mode: str, rules: ChunkingRules) -> str:
    """SHA-256 over chunk text, mode and the canonical effective rules."""
    rules_canonical = json.dumps(rules.model_dump(mode="json"), sort_keys=True)
    payload = f"{chunk_text}|{mode}|{rules_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def build_chunk_records(document_id: str, chunks: list[str], config: ChunkingConfig) -> list[dict[str, Any]]:
    """One record per chunk, in chunk order, with stable chunk_id and chunk_hash."""
    rules = config.effective_rules()
    records: list[dict[str, Any]] = []
    for i, chunk in enumerate(chunks):
        chunk_hash = compute_chunk_hash(chunk, config.mode, rules)
        records.append({
            "chunk_id": generate_chunk_id(document_id, i, chunk_hash),
            "chunk_index": i,
            "chunk_text": chunk,
            "char_count": len(chunk),
            "chunk_hash": chunk_hash,
        })
    return records


def prepare_document(
    raw_text: str,
    config: ChunkingConfig,
    strip_front_matter: bool = False,
    tts_model: str | None = None,
) -> dict[str, Any]:
    """
    Normalize raw text, chunk it and compute stats. Returns document_id,
    normalized_text, chunk records, stats, heading_error (from a bad regex
    delimiter; chunking then runs without headings) and estimated_cost when
    a TTS model is given. Raises ValueError for an unknown TTS model.
    """
    source = strip_frontmatter(raw_text) if strip_front_matter else raw_text
    normalized = normalize_text(source)
    rules = config.effective_rules()

    heading_error = compile_matcher(rules.heading_delimiter).error
    if heading_error:
        logger.warning(
            "Heading delimiter ignored",
            extra={"heading_delimiter": rules.heading_delimiter, "error": heading_error},
        )

    chunks = chunk_text(normalized, config)
    document_id = generate_document_id(normalized)
    stats = get_text_stats(normalized, chunks)
    estimated_cost = estimate_cost(stats.characters, tts_model) if tts_model else None

    logger.info(
        "Document chunked",
        extra={
            "document_id": document_id,
            "mode": config.mode,
            "chunks": stats.chunks,
            "characters": stats.characters,
        },
    )
    if chunks:
        logger.debug(
            "Chunk sizes",
            extra={"document_id": document_id, "sizes": [len(c) for c in chunks]},
        )

    return {
        "document_id": document_id,
        "normalized_text": normalized,
        "chunks": build_chunk_records(document_id, chunks, config),
        "stats": stats,
        "heading_error": heading_error,
        "estimated_cost": estimated_cost,
    }
