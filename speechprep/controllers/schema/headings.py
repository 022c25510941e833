"""Request/response schemas for heading delimiter previews."""

from pydantic import BaseModel, Field

from speechprep.services.chunking.headings import HeadingMatcherInfo


class HeadingPreviewRequest(BaseModel):
    """POST /headings/preview request body."""

    delimiter: str = Field(default="", description="Heading delimiter to try")
    text: str = Field(default="", description="Raw text; only the first max_lines lines are checked")
    max_lines: int = Field(default=6, ge=1, le=200)


class HeadingPreviewLine(BaseModel):
    line: str
    heading: str | None = None


class HeadingPreviewResponse(BaseModel):
    """Matcher description plus the heading detected on each previewed line."""

    info: HeadingMatcherInfo
    lines: list[HeadingPreviewLine] = Field(default_factory=list)
