"""Request/response schemas for POST /chunk and POST /chunk/normalize."""

from pydantic import BaseModel, Field

from speechprep.config.chunking.models import ChunkingConfig
from speechprep.services.chunking.stats import TextStats


class ChunkRequest(BaseModel):
    """POST /chunk request body. Inline chunking config wins over profile."""

    text: str = Field(..., description="Raw text (pasted or decoded file content)")
    profile: str | None = Field(
        default=None, min_length=1, description="Chunking profile from static.json; defaults to settings"
    )
    chunking: ChunkingConfig | None = Field(default=None, description="Inline chunking config (camelCase or snake_case)")
    strip_frontmatter: bool = Field(default=False, description="Drop a leading YAML front matter block")
    tts_model: str | None = Field(default=None, description="tts-1|tts-1-hd, for the cost estimate")


class ChunkRecord(BaseModel):
    """One chunk ready for synthesis, in output order."""

    chunk_id: str
    chunk_index: int = Field(..., ge=0)
    chunk_text: str = Field(..., min_length=1)
    char_count: int = Field(..., ge=1)
    chunk_hash: str


class ChunkResponse(BaseModel):
    """POST /chunk response body."""

    document_id: str
    profile: str | None = Field(default=None, description="Profile used; None for inline config")
    chunking: ChunkingConfig
    normalized_text: str
    chunks: list[ChunkRecord] = Field(default_factory=list)
    stats: TextStats
    heading_error: str | None = Field(default=None, description="Set when the regex delimiter was rejected")
    estimated_cost: float | None = Field(default=None, ge=0, description="USD")


class NormalizeRequest(BaseModel):
    """POST /chunk/normalize request body."""

    text: str
    strip_frontmatter: bool = False


class NormalizeResponse(BaseModel):
    """POST /chunk/normalize response body. stats.chunks is always 0."""

    normalized_text: str
    stats: TextStats
