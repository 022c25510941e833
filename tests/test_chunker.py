"""End-to-end chunking: entry point scenarios, invariants over a generated corpus, prepared documents."""
import random
import re

import pytest

from speechprep.config.chunking.models import ChunkingConfig
from speechprep.services.chunking.chunker import (
    build_chunk_records,
    chunk_text,
    compute_chunk_hash,
    prepare_document,
)
from speechprep.services.chunking.cleaners import normalize_text
from speechprep.services.chunking.segments import build_segments
from speechprep.services.chunking.stats import TextStats, get_text_stats

WORDS = ["alpha", "beta", "gamma", "delta", "narration", "voice", "river", "lantern", "x" * 40]
_MARKDOWN_HEADING = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_PLAIN_HEADING = re.compile(r"^Section\s+", re.MULTILINE)
SECTION_REGEX = r"/(?<text>Section \S+)$/"

# Markers each delimiter removes from heading lines; plain prefixes go first
# so "# Section 1-0" keeps its "Section" under "#, Section".
_HEADING_MARKERS = {
    "#": [_MARKDOWN_HEADING],
    "Section": [_PLAIN_HEADING],
    "#, Section": [_PLAIN_HEADING, _MARKDOWN_HEADING],
    SECTION_REGEX: [_MARKDOWN_HEADING],
}


def _document(seed: int) -> str:
    rng = random.Random(seed)
    lines: list[str] = []
    for section in range(rng.randint(0, 4)):
        heading_roll = rng.random()
        if heading_roll < 0.5:
            lines.append(f"{'#' * rng.randint(1, 3)} Section {seed}-{section}")
            lines.append("")
        elif heading_roll < 0.75:
            lines.append(f"Section {seed}-{section}")
        for _ in range(rng.randint(1, 6)):
            sentences = []
            for _ in range(rng.randint(1, 12)):
                words = rng.choices(WORDS, k=rng.randint(3, 30))
                sentences.append(" ".join(words) + rng.choice([".", "!", "?", "...", ""]))
            lines.append("  ".join(sentences))
            if rng.random() < 0.3:
                lines.append("\t" + " ".join(rng.choices(WORDS, k=8)))
            lines.append("")
    if rng.random() < 0.2:
        lines.append("z" * rng.randint(4500, 9000))
    return "\r\n".join(lines)


CORPUS = [normalize_text(_document(seed)) for seed in range(40)]

CONFIGS = [
    ChunkingConfig(),
    ChunkingConfig(heading_delimiter=""),
    ChunkingConfig(mode="custom", target_chars=200, hard_limit=200, heading_delimiter=""),
    ChunkingConfig(
        mode="custom",
        target_chars=700,
        hard_limit=1000,
        split_on_paragraphs=True,
        split_on_lines=True,
        split_on_sentences=False,
        heading_delimiter="#",
    ),
    ChunkingConfig(
        mode="custom",
        target_chars=1500,
        hard_limit=2000,
        split_on_paragraphs=True,
        split_on_lines=False,
        split_on_sentences=True,
        heading_delimiter="#",
    ),
    ChunkingConfig(
        mode="custom",
        target_chars=300,
        hard_limit=4096,
        split_on_paragraphs=False,
        split_on_lines=False,
        split_on_sentences=False,
        heading_delimiter="",
    ),
    ChunkingConfig(heading_delimiter="#, Section"),
    ChunkingConfig(
        mode="custom",
        target_chars=400,
        hard_limit=600,
        split_on_paragraphs=True,
        split_on_lines=False,
        split_on_sentences=True,
        heading_delimiter="Section",
    ),
    ChunkingConfig(
        mode="custom",
        target_chars=1000,
        hard_limit=1000,
        split_on_paragraphs=False,
        split_on_lines=True,
        split_on_sentences=False,
        heading_delimiter=SECTION_REGEX,
    ),
]


def _non_ws(text: str) -> str:
    return "".join(text.split())


def _expected_content(text: str, config: ChunkingConfig) -> str:
    for marker in _HEADING_MARKERS.get(config.effective_rules().heading_delimiter, []):
        text = marker.sub("", text)
    return _non_ws(text)


# Scenarios


def test_preset_heading_then_body():
    assert chunk_text("# Title\n\nHello world.", ChunkingConfig()) == ["Title", "Hello world."]


def test_custom_unbroken_text_is_sliced():
    config = ChunkingConfig(
        mode="custom",
        target_chars=1000,
        hard_limit=1000,
        split_on_paragraphs=False,
        split_on_lines=False,
        split_on_sentences=False,
        heading_delimiter="",
    )
    chunks = chunk_text("a" * 5000, config)
    assert len(chunks) == 5
    assert all(len(chunk) == 1000 for chunk in chunks)


def test_regex_delimiter_heading():
    config = ChunkingConfig(heading_delimiter="/^(?<text>.+):$/")
    assert chunk_text("Chapter One:\n\nIt began.", config) == ["Chapter One", "It began."]


def test_empty_input():
    assert chunk_text("", ChunkingConfig()) == []
    assert chunk_text("   \n ", ChunkingConfig(mode="custom")) == []
    assert get_text_stats("", []) == TextStats(characters=0, words=0, chunks=0, minutes=0.0)


def test_paragraphs_packed_toward_target():
    config = ChunkingConfig(
        mode="custom",
        target_chars=700,
        hard_limit=1000,
        split_on_paragraphs=True,
        split_on_lines=False,
        split_on_sentences=False,
        heading_delimiter="",
    )
    p1, p2, p3 = "a" * 300, "b" * 300, "c" * 300
    assert chunk_text(f"{p1}\n\n{p2}", config) == [f"{p1} {p2}"]
    assert chunk_text(f"{p1}\n\n{p2}\n\n{p3}", config) == [f"{p1} {p2}", p3]


# Invariants


@pytest.mark.parametrize("config", CONFIGS)
def test_no_content_lost_or_duplicated(config):
    for text in CORPUS:
        chunks = chunk_text(text, config)
        assert "".join(_non_ws(c) for c in chunks) == _expected_content(text, config)


@pytest.mark.parametrize("config", CONFIGS)
def test_chunks_are_trimmed_and_non_empty(config):
    for text in CORPUS:
        for chunk in chunk_text(text, config):
            assert chunk
            assert chunk == chunk.strip()


@pytest.mark.parametrize("config", CONFIGS)
def test_chunks_within_hard_limit(config):
    hard_limit = config.effective_rules().hard_limit
    for text in CORPUS:
        assert all(len(chunk) <= hard_limit for chunk in chunk_text(text, config))


@pytest.mark.parametrize("config", CONFIGS)
def test_deterministic(config):
    for text in CORPUS:
        assert chunk_text(text, config) == chunk_text(text, config)


@pytest.mark.parametrize("config", [c for c in CONFIGS if c.effective_rules().heading_delimiter])
def test_headings_are_standalone_chunks(config):
    delimiter = config.effective_rules().heading_delimiter
    for text in CORPUS:
        headings = [s.text for s in build_segments(text, delimiter) if s.kind == "heading"]
        chunks = chunk_text(text, config)
        assert [c for c in chunks if c in set(headings)] == headings


# Records and prepared documents


def test_chunk_records_are_ordered_and_stable():
    config = ChunkingConfig()
    chunks = ["Title", "Hello world."]
    records = build_chunk_records("doc_1", chunks, config)
    assert [r["chunk_index"] for r in records] == [0, 1]
    assert [r["chunk_text"] for r in records] == chunks
    assert [r["char_count"] for r in records] == [5, 12]
    assert records == build_chunk_records("doc_1", chunks, config)
    assert records[0]["chunk_id"].startswith("chunk_")
    assert records[0]["chunk_id"] != build_chunk_records("doc_2", chunks, config)[0]["chunk_id"]


def test_chunk_hash_depends_on_rules():
    preset = ChunkingConfig()
    custom = ChunkingConfig(mode="custom")
    assert compute_chunk_hash("x", "preset", preset.effective_rules()) != compute_chunk_hash(
        "x", "custom", custom.effective_rules()
    )


def test_prepare_document():
    prepared = prepare_document("  # Title \r\n\r\nHello   world.", ChunkingConfig(), tts_model="tts-1")
    assert prepared["normalized_text"] == "# Title\n\nHello world."
    assert [r["chunk_text"] for r in prepared["chunks"]] == ["Title", "Hello world."]
    assert prepared["document_id"].startswith("doc_")
    assert prepared["stats"].chunks == 2
    assert prepared["stats"].words == 4
    assert prepared["estimated_cost"] == pytest.approx(len("# Title\n\nHello world.") / 1000 * 0.015)
    assert prepared["heading_error"] is None


def test_prepare_document_same_text_same_ids():
    first = prepare_document("One.\n\nTwo.", ChunkingConfig())
    second = prepare_document("One.   \n\nTwo.", ChunkingConfig())
    assert first["document_id"] == second["document_id"]
    assert first["chunks"] == second["chunks"]


def test_prepare_document_reports_bad_regex():
    config = ChunkingConfig(mode="custom", heading_delimiter="/([/")
    prepared = prepare_document("# Title\n\nBody.", config)
    assert prepared["heading_error"].startswith("Invalid regex delimiter")
    assert [r["chunk_text"] for r in prepared["chunks"]] == ["# Title Body."]


def test_prepare_document_strips_frontmatter():
    raw = "---\ntitle: Notes\n---\n\n# Intro\n\nText."
    prepared = prepare_document(raw, ChunkingConfig(), strip_front_matter=True)
    assert [r["chunk_text"] for r in prepared["chunks"]] == ["Intro", "Text."]
    assert prepare_document(raw, ChunkingConfig())["normalized_text"].startswith("---")


def test_prepare_document_unknown_tts_model():
    with pytest.raises(ValueError):
        prepare_document("text", ChunkingConfig(), tts_model="nope")


def test_prepare_document_empty():
    prepared = prepare_document("", ChunkingConfig())
    assert prepared["chunks"] == []
    assert prepared["stats"] == TextStats()
    assert prepared["estimated_cost"] is None
