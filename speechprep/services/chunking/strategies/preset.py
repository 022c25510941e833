"""
Preset chunking: structure-aware packing for narrated documents.

Headings become their own short chunks, each section goes out whole when it
fits, and long sections fall back to paragraph and sentence packing.
"""

from speechprep.config.chunking.models import PRESET_RULES, ChunkingRules
from speechprep.services.chunking.packing import pack_paragraphs, split_oversized
from speechprep.services.chunking.segments import build_sections, build_segments, render_transcript

# Provider-side ceiling for one section. Kept apart from the configurable
# hard limit even though both are 4096 today.
SECTION_CHAR_LIMIT = 4096


def chunk_preset(
    text: str,
    hard_limit: int = PRESET_RULES.hard_limit,
    heading_delimiter: str | None = PRESET_RULES.heading_delimiter,
) -> list[str]:
    """Chunk normalized text by headings and sections, bounded by hard_limit."""
    segments = build_segments(text, heading_delimiter)
    if not segments:
        return []

    total_chars = sum(len(segment.text) for segment in segments)
    has_headings = any(segment.kind == "heading" and segment.text.strip() for segment in segments)

    if not has_headings and total_chars <= SECTION_CHAR_LIMIT:
        transcript = render_transcript(segments)
        if not transcript:
            return []
        if len(transcript) <= hard_limit:
            return [transcript]
        return split_oversized(transcript, hard_limit)

    chunks: list[str] = []
    for section in build_sections(segments):
        if section.heading:
            chunks.append(section.heading)
        if not section.paragraphs:
            continue
        section_text = "\n\n".join(section.paragraphs).strip()
        if not section_text:
            continue
        if len(section_text) <= SECTION_CHAR_LIMIT and len(section_text) <= hard_limit:
            chunks.append(section_text)
            continue
        chunks.extend(pack_paragraphs(section.paragraphs, hard_limit))
    return chunks


def preset_chunks(text: str, rules: ChunkingRules) -> list[str]:
    """Registry entry: preset chunking under the given rules."""
    return chunk_preset(text, hard_limit=rules.hard_limit, heading_delimiter=rules.heading_delimiter)
