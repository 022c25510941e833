"""Heading delimiter previews: describe a delimiter and show which lines it treats as headings."""

from fastapi import APIRouter, Query

from speechprep.controllers.schema.headings import (
    HeadingPreviewLine,
    HeadingPreviewRequest,
    HeadingPreviewResponse,
)
from speechprep.services.chunking.headings import (
    HeadingMatcherInfo,
    compile_matcher,
    describe_matcher,
    get_heading_matcher_info,
    match_line,
)

router = APIRouter(prefix="/headings", tags=["headings"])


@router.get("", response_model=HeadingMatcherInfo)
async def describe_delimiter(delimiter: str = Query(default="")) -> HeadingMatcherInfo:
    """Report whether the delimiter compiles to a regex or a token list (or its error)."""
    return get_heading_matcher_info(delimiter)


@router.post("/preview", response_model=HeadingPreviewResponse)
async def preview_headings(body: HeadingPreviewRequest) -> HeadingPreviewResponse:
    """Run the delimiter over the first lines of the raw text."""
    result = compile_matcher(body.delimiter)
    lines: list[HeadingPreviewLine] = []
    if body.text.strip():
        raw_lines = body.text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        lines = [
            HeadingPreviewLine(line=line, heading=match_line(line, result.matcher))
            for line in raw_lines[: body.max_lines]
        ]
    return HeadingPreviewResponse(info=describe_matcher(result), lines=lines)
