"""POST /chunk: normalize and chunk raw text for synthesis. Config from inline body or a static.json profile."""

from fastapi import APIRouter, HTTPException

from speechprep.config.chunking.static import resolve_chunking_config, resolve_profile_name
from speechprep.config.logging import get_logger
from speechprep.config.settings import get_settings
from speechprep.controllers.schema.chunk import (
    ChunkRecord,
    ChunkRequest,
    ChunkResponse,
    NormalizeRequest,
    NormalizeResponse,
)
from speechprep.services.chunking.chunker import prepare_document
from speechprep.services.chunking.cleaners import normalize_text, strip_frontmatter
from speechprep.services.chunking.stats import get_text_stats

logger = get_logger(__name__)

router = APIRouter(prefix="/chunk", tags=["chunking"])


def _check_size(text: str) -> None:
    limit = get_settings().max_text_chars
    if len(text) > limit:
        raise HTTPException(status_code=413, detail=f"Text exceeds {limit} characters")


@router.post("", response_model=ChunkResponse)
async def chunk_document(body: ChunkRequest) -> ChunkResponse:
    """
    Normalize the text and split it into ordered chunks. Inline `chunking`
    wins over `profile`; with neither, the settings profile is used.
    """
    _check_size(body.text)
    settings = get_settings()

    if body.chunking is not None:
        config = body.chunking
        profile = None
    else:
        profile = resolve_profile_name(body.profile or settings.chunking_profile)
        try:
            config = resolve_chunking_config(profile)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        prepared = prepare_document(
            body.text,
            config,
            strip_front_matter=body.strip_frontmatter,
            tts_model=body.tts_model or settings.default_tts_model,
        )
    except ValueError as e:
        logger.info("Chunk request rejected", extra={"error": str(e)})
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ChunkResponse(
        document_id=prepared["document_id"],
        profile=profile,
        chunking=config,
        normalized_text=prepared["normalized_text"],
        chunks=[ChunkRecord(**record) for record in prepared["chunks"]],
        stats=prepared["stats"],
        heading_error=prepared["heading_error"],
        estimated_cost=prepared["estimated_cost"],
    )


@router.post("/normalize", response_model=NormalizeResponse)
async def normalize_document(body: NormalizeRequest) -> NormalizeResponse:
    """Return the normalized text (what would be chunked) and its counts."""
    _check_size(body.text)
    source = strip_frontmatter(body.text) if body.strip_frontmatter else body.text
    normalized = normalize_text(source)
    return NormalizeResponse(normalized_text=normalized, stats=get_text_stats(normalized, []))
