"""Sentence splitting for chunk packing."""

import re

_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> list[str]:
    """
    Split after a run of '.', '!' or '?' followed by whitespace. Punctuation
    stays with its sentence; empty pieces are dropped.

    Heuristic only: abbreviations ("Dr. Smith"), decimals followed by a space
    and punctuation inside quotes are split like any other sentence end.
    """
    if not text or not text.strip():
        return []
    parts = _SENTENCE_BREAK.split(text)
    return [p.strip() for p in parts if p.strip()]
