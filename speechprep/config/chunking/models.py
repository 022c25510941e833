"""Chunking configuration models. Read-only; no business logic beyond clamping."""

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

ChunkingMode = Literal["preset", "custom"]
CHUNKING_MODES: tuple[str, ...] = ("preset", "custom")

MIN_CHUNK_CHARS = 200
MAX_CHUNK_CHARS = 4096

# Older exports named the preset after the studio that shipped it
_MODE_ALIASES = {"valeon": "preset"}


class ChunkingRules(BaseModel):
    """Effective rule set handed to a chunking strategy. Immutable."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    target_chars: int
    hard_limit: int
    split_on_paragraphs: bool
    split_on_lines: bool
    split_on_sentences: bool
    heading_delimiter: str


PRESET_RULES = ChunkingRules(
    target_chars=4096,
    hard_limit=4096,
    split_on_paragraphs=True,
    split_on_lines=False,
    split_on_sentences=True,
    heading_delimiter="#",
)


def clamp_chars(value: Any, fallback: int) -> int:
    """Clamp a size into [MIN_CHUNK_CHARS, MAX_CHUNK_CHARS]; non-numbers give the fallback."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return fallback
    return int(min(max(value, MIN_CHUNK_CHARS), MAX_CHUNK_CHARS))


class ChunkingConfig(BaseModel):
    """
    User-facing chunking configuration. Accepts camelCase (as exported by the
    studio UI) or snake_case keys. Sizes are clamped on load and hard_limit is
    raised to at least target_chars.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mode: ChunkingMode = Field(default="preset", description="preset|custom")
    target_chars: int = Field(default=PRESET_RULES.target_chars, description="Preferred chunk size")
    hard_limit: int = Field(default=PRESET_RULES.hard_limit, description="Maximum chunk size")
    split_on_paragraphs: bool = Field(default=PRESET_RULES.split_on_paragraphs)
    split_on_lines: bool = Field(default=PRESET_RULES.split_on_lines)
    split_on_sentences: bool = Field(default=PRESET_RULES.split_on_sentences)
    heading_delimiter: str | None = Field(
        default=PRESET_RULES.heading_delimiter,
        description="Regex in /.../flags form or comma-separated prefixes; blank disables headings",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def resolve_mode_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _MODE_ALIASES.get(value, value)
        return value

    @field_validator("target_chars", "hard_limit", mode="before")
    @classmethod
    def clamp_sizes(cls, value: Any) -> int:
        return clamp_chars(value, MAX_CHUNK_CHARS)

    @model_validator(mode="after")
    def hard_limit_covers_target(self):
        """Keep hard_limit >= target_chars."""
        if self.hard_limit < self.target_chars:
            self.hard_limit = self.target_chars
        return self

    def effective_rules(self) -> ChunkingRules:
        """
        Rules the chunker actually applies. Preset mode uses the fixed preset
        record and only takes the heading delimiter from this config (None
        falls back to the preset's; an empty string disables headings).
        """
        if self.mode == "preset":
            if self.heading_delimiter is None:
                return PRESET_RULES
            return PRESET_RULES.model_copy(update={"heading_delimiter": self.heading_delimiter})
        return ChunkingRules(
            target_chars=self.target_chars,
            hard_limit=self.hard_limit,
            split_on_paragraphs=self.split_on_paragraphs,
            split_on_lines=self.split_on_lines,
            split_on_sentences=self.split_on_sentences,
            heading_delimiter=self.heading_delimiter or "",
        )
