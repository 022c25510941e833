"""
Heading detection for structure-aware chunking.

A heading delimiter is either a regex written as /pattern/flags or a
comma-separated list of line prefixes. A prefix made only of '#' (1-6 of
them) matches Markdown headings at that level or deeper; any other prefix
matches literally and the rest of the line is the heading text.
"""

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# JS-style regex flags accepted in /pattern/flags. g, u and d have no effect
# on a single-line match; y anchors at the start of the line.
_REGEX_FLAGS: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,
    "u": 0,
    "d": 0,
    "y": 0,
}

_MARKDOWN_TOKEN = re.compile(r"#{1,6}")
_JS_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?=[A-Za-z_])")
_JS_NAMED_BACKREF = re.compile(r"\\k<([A-Za-z_][A-Za-z0-9_]*)>")


class RegexMatcher(BaseModel):
    """Heading matcher compiled from a /pattern/flags delimiter."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["regex"] = "regex"
    regex: re.Pattern
    source: str
    flags: str = ""
    anchored: bool = False


class TokenMatcher(BaseModel):
    """Heading matcher built from a comma-separated prefix list. Tokens are tried in order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tokens"] = "tokens"
    tokens: tuple[str, ...]


HeadingMatcher = Annotated[Union[RegexMatcher, TokenMatcher], Field(discriminator="kind")]


class MatcherResult(BaseModel):
    """Outcome of compiling a delimiter. A bad regex gives matcher=None and an error."""

    matcher: HeadingMatcher | None = None
    error: str | None = None


class HeadingMatcherInfo(BaseModel):
    """Description of a compiled delimiter for previews."""

    kind: Literal["regex", "tokens"] | None = None
    error: str | None = None
    pattern: str | None = None
    tokens: list[str] | None = None


def _translate_js_pattern(pattern: str) -> str:
    """Rewrite (?<name>...) and \\k<name> into Python's (?P<name>...) and (?P=name)."""
    pattern = _JS_NAMED_GROUP.sub("(?P<", pattern)
    return _JS_NAMED_BACKREF.sub(r"(?P=\1)", pattern)


def _compile_regex(body: str, flags: str) -> MatcherResult:
    if len(set(flags)) != len(flags):
        return MatcherResult(error=f"Invalid regex delimiter: repeated flag in {flags!r}")
    unknown = [f for f in flags if f not in _REGEX_FLAGS]
    if unknown:
        return MatcherResult(error=f"Invalid regex delimiter: unknown flag {unknown[0]!r}")
    re_flags = 0
    for f in flags:
        re_flags |= _REGEX_FLAGS[f]
    try:
        regex = re.compile(_translate_js_pattern(body), re_flags)
    except re.error as e:
        return MatcherResult(error=f"Invalid regex delimiter: {e}")
    matcher = RegexMatcher(regex=regex, source=body, flags=flags, anchored="y" in flags)
    return MatcherResult(matcher=matcher)


def compile_matcher(delimiter: str | None) -> MatcherResult:
    """
    Compile a heading delimiter. Blank input gives no matcher and no error.
    "/.../flags" compiles as a regex; anything else is a token list.
    """
    trimmed = (delimiter or "").strip()
    if not trimmed:
        return MatcherResult()

    last_slash = trimmed.rfind("/")
    if trimmed.startswith("/") and last_slash > 0:
        return _compile_regex(trimmed[1:last_slash], trimmed[last_slash + 1 :])

    tokens = tuple(t.strip() for t in trimmed.split(",") if t.strip())
    if not tokens:
        return MatcherResult()
    return MatcherResult(matcher=TokenMatcher(tokens=tokens))


def _match_regex(line: str, matcher: RegexMatcher) -> str | None:
    found = matcher.regex.match(line) if matcher.anchored else matcher.regex.search(line)
    if found is None:
        return None
    named = found.groupdict().get("text")
    if named:
        return named.strip()
    if matcher.regex.groups >= 1 and found.group(1):
        return found.group(1).strip()
    return found.group(0).strip()


def _match_token(line: str, token: str) -> str | None:
    if _MARKDOWN_TOKEN.fullmatch(token):
        found = re.match(r"^#{%d,6}\s+(.+)$" % len(token), line)
        return found.group(1).strip() if found else None
    if not line.startswith(token):
        return None
    return line[len(token) :].strip()


def match_line(line: str, matcher: HeadingMatcher | None) -> str | None:
    """Return the heading text if the line is a heading, else None. Blank text never matches."""
    if matcher is None:
        return None
    trimmed = line.strip()
    if not trimmed:
        return None
    if matcher.kind == "regex":
        return _match_regex(trimmed, matcher) or None
    for token in matcher.tokens:
        text = _match_token(trimmed, token)
        if text:
            return text
    return None


def describe_matcher(result: MatcherResult) -> HeadingMatcherInfo:
    """Summarize a compiled delimiter for display."""
    matcher = result.matcher
    if matcher is None:
        return HeadingMatcherInfo(error=result.error)
    if matcher.kind == "regex":
        return HeadingMatcherInfo(kind="regex", pattern=f"/{matcher.source}/{matcher.flags}")
    return HeadingMatcherInfo(kind="tokens", tokens=list(matcher.tokens))


def get_heading_matcher_info(delimiter: str | None) -> HeadingMatcherInfo:
    """Compile and describe a delimiter (UI preview)."""
    return describe_matcher(compile_matcher(delimiter))


def get_heading_match(line: str, delimiter: str | None) -> str | None:
    """Heading text for a single line under the given delimiter (UI preview)."""
    return match_line(line, compile_matcher(delimiter).matcher)
