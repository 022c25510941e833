"""Custom rule chunking: split into units by the enabled rules, then pack units greedily."""

import re

from pydantic import BaseModel

from speechprep.config.chunking.models import ChunkingRules
from speechprep.services.chunking.headings import compile_matcher, match_line
from speechprep.services.chunking.packing import slice_fixed
from speechprep.services.chunking.sentences import split_sentences

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


class HeadingBlock(BaseModel):
    """A heading line, or a run of non-heading lines, in document order."""

    heading: str | None = None
    body: str = ""


def split_units(text: str, rules: ChunkingRules) -> list[str]:
    """
    Apply the enabled splits in order (paragraphs, then lines, then
    sentences), each on the output of the previous one. Units are trimmed;
    empty units are dropped.
    """
    units = [text]
    if rules.split_on_paragraphs:
        units = [part for unit in units for part in _PARAGRAPH_BREAK.split(unit)]
    if rules.split_on_lines:
        units = [part for unit in units for part in unit.split("\n")]
    if rules.split_on_sentences:
        units = [part for unit in units for part in split_sentences(unit)]
    return [unit.strip() for unit in units if unit.strip()]


def pack_units(units: list[str], target_chars: int, hard_limit: int) -> list[str]:
    """
    Join units with single spaces while the chunk stays within target_chars.
    A unit over hard_limit flushes the buffer and is sliced to hard_limit pieces.
    """
    chunks: list[str] = []
    current = ""

    def flush() -> None:
        nonlocal current
        if current.strip():
            chunks.append(current.strip())
        current = ""

    for unit in units:
        if len(unit) > hard_limit:
            flush()
            chunks.extend(slice_fixed(unit, hard_limit))
            continue
        separator = " " if current else ""
        if len(current) + len(separator) + len(unit) <= target_chars:
            current = f"{current}{separator}{unit}"
            continue
        flush()
        current = unit

    flush()
    return chunks


def chunk_by_rules(text: str, rules: ChunkingRules) -> list[str]:
    """Unit splitting plus packing toward min(target_chars, hard_limit)."""
    target = min(rules.target_chars, rules.hard_limit)
    return pack_units(split_units(text, rules), target, rules.hard_limit)


def split_by_headings(text: str, heading_delimiter: str | None) -> list[HeadingBlock]:
    """
    Cut text at heading lines. Each heading is its own block; the lines
    between headings form one body block. No matcher means one body block.
    """
    matcher = compile_matcher(heading_delimiter).matcher
    if matcher is None:
        return [HeadingBlock(body=text)]

    blocks: list[HeadingBlock] = []
    body_lines: list[str] = []
    for line in text.split("\n"):
        heading = match_line(line, matcher)
        if heading:
            if body_lines:
                blocks.append(HeadingBlock(body="\n".join(body_lines)))
            blocks.append(HeadingBlock(heading=heading))
            body_lines = []
            continue
        body_lines.append(line)

    if body_lines:
        blocks.append(HeadingBlock(body="\n".join(body_lines)))
    return blocks or [HeadingBlock(body=text)]


def chunk_custom(text: str, rules: ChunkingRules) -> list[str]:
    """
    Custom chunking; headings (when a delimiter is set) become standalone
    chunks. No chunk exceeds hard_limit, headings included.
    """
    if not rules.heading_delimiter.strip():
        return chunk_by_rules(text, rules)

    chunks: list[str] = []
    for block in split_by_headings(text, rules.heading_delimiter):
        if block.heading:
            # A matched line longer than hard_limit is still heading-only, just sliced
            chunks.extend(slice_fixed(block.heading.strip(), rules.hard_limit))
        if block.body.strip():
            chunks.extend(chunk_by_rules(block.body, rules))
    return [chunk for chunk in chunks if chunk]
