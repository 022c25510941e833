"""Text cleaners run before chunking: line-ending and whitespace normalization, front matter."""

import re

from pydantic import BaseModel

_INLINE_WS = re.compile(r"[ \t]+")
_LEADING_NEWLINES = re.compile(r"^\n+")


class Frontmatter(BaseModel):
    """A YAML front matter block split off a document."""

    frontmatter: str
    body: str
    end_line: int


def _unify_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_line(line: str) -> str:
    """Collapse runs of spaces/tabs to one space and trim."""
    return _INLINE_WS.sub(" ", line).strip()


def normalize_text(text: str) -> str:
    """
    Canonical form for chunking: \\r\\n and \\r become \\n, each line has its
    internal space/tab runs collapsed and is trimmed, and the whole result is
    trimmed. Idempotent.
    """
    if not text:
        return ""
    lines = _unify_line_endings(text).split("\n")
    return "\n".join(normalize_line(line) for line in lines).strip()


def parse_frontmatter(text: str) -> Frontmatter | None:
    """
    Detect a leading YAML front matter block: first line "---", closed by a
    later line "---" or "...". Returns None when there is none.
    """
    lines = _unify_line_endings(text or "").split("\n")
    if len(lines) < 2 or lines[0].strip() != "---":
        return None
    for index in range(1, len(lines)):
        if lines[index].strip() in ("---", "..."):
            return Frontmatter(
                frontmatter="\n".join(lines[: index + 1]),
                body="\n".join(lines[index + 1 :]),
                end_line=index + 1,
            )
    return None


def strip_frontmatter(text: str) -> str:
    """Return the text without its front matter block, or unchanged if it has none."""
    parsed = parse_frontmatter(text)
    if parsed is None:
        return text
    return _LEADING_NEWLINES.sub("", parsed.body)
