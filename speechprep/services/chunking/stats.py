"""Text statistics for prepared documents: size, words, chunk count, listening time, cost."""

from pydantic import BaseModel, Field

WORDS_PER_MINUTE = 155

# USD per 1000 input characters
TTS_MODEL_COST_PER_1K: dict[str, float] = {
    "tts-1": 0.015,
    "tts-1-hd": 0.03,
}


class TextStats(BaseModel):
    """Counts derived from normalized text and its chunks."""

    characters: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)
    chunks: int = Field(default=0, ge=0)
    minutes: float = Field(default=0.0, ge=0, description="Estimated listening time")


def get_text_stats(text: str, chunks: list[str]) -> TextStats:
    """Characters and words of the trimmed text, number of chunks, minutes at 155 wpm."""
    trimmed = (text or "").strip()
    if not trimmed:
        return TextStats()
    words = len(trimmed.split())
    return TextStats(
        characters=len(trimmed),
        words=words,
        chunks=len(chunks),
        minutes=words / WORDS_PER_MINUTE,
    )


def estimate_cost(characters: int, tts_model: str) -> float:
    """Synthesis cost in USD for the given character count. Raises ValueError for unknown models."""
    rate = TTS_MODEL_COST_PER_1K.get(tts_model)
    if rate is None:
        raise ValueError(f"Unknown TTS model: {tts_model!r}")
    return characters / 1000 * rate
