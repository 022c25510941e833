"""Structural segmentation: classify lines into headings and body paragraphs, then group into sections."""

from typing import Literal

from pydantic import BaseModel, Field

from speechprep.services.chunking.headings import compile_matcher, match_line


class Segment(BaseModel):
    """A heading or one body paragraph, in document order."""

    kind: Literal["heading", "body"]
    text: str


class Section(BaseModel):
    """A heading (None for leading text) and the paragraphs that follow it."""

    heading: str | None = None
    paragraphs: list[str] = Field(default_factory=list)


def build_segments(text: str, heading_delimiter: str | None) -> list[Segment]:
    """
    Walk the text line by line. Blank lines end a paragraph, heading lines
    end a paragraph and become heading segments, other lines are joined into
    the current paragraph with single spaces. Non-blank input always yields
    at least one segment.
    """
    matcher = compile_matcher(heading_delimiter).matcher
    segments: list[Segment] = []
    paragraph_lines: list[str] = []

    def flush_paragraph() -> None:
        paragraph = " ".join(paragraph_lines).strip()
        if paragraph:
            segments.append(Segment(kind="body", text=paragraph))
        paragraph_lines.clear()

    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            flush_paragraph()
            continue
        heading = match_line(trimmed, matcher)
        if heading:
            flush_paragraph()
            segments.append(Segment(kind="heading", text=heading))
            continue
        paragraph_lines.append(trimmed)

    flush_paragraph()

    if not segments and text.strip():
        segments.append(Segment(kind="body", text=text.strip()))
    return segments


def build_sections(segments: list[Segment]) -> list[Section]:
    """Group body segments under the nearest preceding heading. Returns at least one section."""
    sections: list[Section] = []
    current: Section | None = None

    for segment in segments:
        if segment.kind == "heading":
            current = Section(heading=segment.text.strip())
            sections.append(current)
            continue
        if current is None:
            current = Section()
            sections.append(current)
        text = segment.text.strip()
        if text:
            current.paragraphs.append(text)

    if not sections:
        sections.append(Section())
    return sections


def render_transcript(segments: list[Segment]) -> str:
    """Join segment texts with blank lines."""
    return "\n\n".join(segment.text for segment in segments).strip()
