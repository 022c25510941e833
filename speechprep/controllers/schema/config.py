"""Response schemas for the chunking config routes."""

from pydantic import BaseModel, Field

from speechprep.config.chunking.models import ChunkingConfig, ChunkingRules


class ProfilesResponse(BaseModel):
    """GET /config/profiles response body."""

    active: str
    profiles: dict[str, ChunkingConfig] = Field(default_factory=dict)


class ImportConfigResponse(BaseModel):
    """POST /config/import response body: the config as it will be applied."""

    chunking: ChunkingConfig
    effective_rules: ChunkingRules
