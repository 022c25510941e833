"""Chunking config routes: list stored profiles, coerce an imported config."""

from typing import Any

from fastapi import APIRouter, Body

from speechprep.config.chunking.static import (
    coerce_chunking_config,
    get_active_profile_name,
    load_chunking_profiles,
)
from speechprep.controllers.schema.config import ImportConfigResponse, ProfilesResponse

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/profiles", response_model=ProfilesResponse)
async def list_profiles() -> ProfilesResponse:
    """All profiles from static.json and the one marked active."""
    return ProfilesResponse(active=get_active_profile_name(), profiles=load_chunking_profiles())


@router.post("/import", response_model=ImportConfigResponse)
async def import_config(payload: Any = Body(default=None)) -> ImportConfigResponse:
    """
    Accept a previously exported settings file (full export or the chunking
    block alone). Wrong types fall back to defaults, sizes are clamped.
    """
    config = coerce_chunking_config(payload)
    return ImportConfigResponse(chunking=config, effective_rules=config.effective_rules())
