"""
Chunking profiles shipped in static.json, plus coercion of imported
settings files into a ChunkingConfig.

static.json holds {"active": <name>, "profiles": {<name>: <config>}}. The
file is read and validated once; "active" must name one of the profiles.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from speechprep.config.chunking.models import CHUNKING_MODES, ChunkingConfig

PROFILES_PATH = Path(__file__).resolve().parent / "static.json"
ACTIVE_PROFILE = "active"

# (camelCase key, snake_case key) for every boolean rule
_BOOL_FIELDS = (
    ("splitOnParagraphs", "split_on_paragraphs"),
    ("splitOnLines", "split_on_lines"),
    ("splitOnSentences", "split_on_sentences"),
)


class ProfileFile(BaseModel):
    """Validated contents of static.json."""

    active: str = "preset"
    profiles: dict[str, ChunkingConfig] = Field(default_factory=dict)

    @model_validator(mode="after")
    def active_is_a_profile(self):
        if self.active not in self.profiles:
            raise ValueError(f"Active profile {self.active!r} not found in profiles")
        return self


@lru_cache
def load_profile_file() -> ProfileFile:
    """Read and validate static.json once per process."""
    return ProfileFile.model_validate_json(PROFILES_PATH.read_text(encoding="utf-8"))


def load_chunking_profiles() -> dict[str, ChunkingConfig]:
    """All stored profiles by name."""
    return load_profile_file().profiles


def get_active_profile_name() -> str:
    return load_profile_file().active


def resolve_profile_name(profile_name: str) -> str:
    """Map "active" to the profile static.json marks active; other names pass through."""
    return get_active_profile_name() if profile_name == ACTIVE_PROFILE else profile_name


def resolve_chunking_config(profile_name: str, inline_config: dict | None = None) -> ChunkingConfig:
    """
    Inline config wins when given and non-empty; otherwise look the profile
    up ("active" included). Raises ValueError for an unknown profile.
    """
    if inline_config:
        return ChunkingConfig.model_validate(inline_config)
    name = resolve_profile_name(profile_name)
    config = load_chunking_profiles().get(name)
    if config is None:
        raise ValueError(f"Unknown chunking profile: {name!r}")
    return config


def _pick(record: dict, camel: str, snake: str) -> Any:
    return record[camel] if camel in record else record.get(snake)


def coerce_chunking_config(value: Any) -> ChunkingConfig:
    """
    Build a ChunkingConfig from an imported settings file without failing.
    Accepts either the chunking block itself or a full export with a
    "chunking" key. Values of the wrong type fall back to the defaults;
    sizes are clamped by the model.
    """
    record = value if isinstance(value, dict) else {}
    if isinstance(record.get("chunking"), dict):
        record = record["chunking"]

    defaults = ChunkingConfig()
    data: dict[str, Any] = {}

    mode = record.get("mode")
    if isinstance(mode, str) and (mode in CHUNKING_MODES or mode == "valeon"):
        data["mode"] = mode

    for camel, snake in (("targetChars", "target_chars"), ("hardLimit", "hard_limit")):
        size = _pick(record, camel, snake)
        if size is not None:
            data[snake] = size

    for camel, snake in _BOOL_FIELDS:
        flag = _pick(record, camel, snake)
        data[snake] = flag if isinstance(flag, bool) else getattr(defaults, snake)

    delimiter = _pick(record, "headingDelimiter", "heading_delimiter")
    data["heading_delimiter"] = delimiter if isinstance(delimiter, str) else defaults.heading_delimiter

    return ChunkingConfig.model_validate(data)
