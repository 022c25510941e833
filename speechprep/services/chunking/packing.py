"""
Greedy packing shared by the chunking strategies.

Nothing here drops text: a piece that cannot fit is reduced by sentence
splitting and, as a last resort, by fixed-size slicing.
"""

from speechprep.services.chunking.sentences import split_sentences


def slice_fixed(text: str, max_chars: int) -> list[str]:
    """Cut text into max_chars-character slices (last one shorter), trimmed; blank slices dropped."""
    slices = (text[i : i + max_chars].strip() for i in range(0, len(text), max_chars))
    return [s for s in slices if s]


def split_oversized(text: str, max_chars: int) -> list[str]:
    """
    Split a too-long paragraph. Sentences are packed greedily with single
    spaces up to max_chars; a sentence longer than max_chars is sliced.
    Falls back to slicing the whole text when no sentences come out.
    """
    parts: list[str] = []
    current = ""

    for sentence in split_sentences(text):
        if len(sentence) > max_chars:
            if current:
                parts.append(current)
                current = ""
            parts.extend(slice_fixed(sentence, max_chars))
            continue
        if not current:
            current = sentence
        elif len(current) + 1 + len(sentence) <= max_chars:
            current = f"{current} {sentence}"
        else:
            parts.append(current)
            current = sentence

    if current:
        parts.append(current)
    return parts or slice_fixed(text, max_chars)


def pack_paragraphs(paragraphs: list[str], max_chars: int) -> list[str]:
    """
    Pack paragraphs in order, blank-line separated, up to max_chars per chunk.
    A paragraph over max_chars flushes the buffer and goes through split_oversized.
    """
    chunks: list[str] = []
    buffer = ""

    def flush() -> None:
        nonlocal buffer
        if buffer.strip():
            chunks.append(buffer.strip())
        buffer = ""

    for paragraph in paragraphs:
        text = paragraph.strip()
        if not text:
            continue
        if len(text) > max_chars:
            flush()
            chunks.extend(split_oversized(text, max_chars))
            continue
        if not buffer:
            buffer = text
        elif len(buffer) + 2 + len(text) <= max_chars:
            buffer = f"{buffer}\n\n{text}"
        else:
            flush()
            buffer = text

    flush()
    return chunks
