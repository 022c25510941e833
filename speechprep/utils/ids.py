"""Id generation for documents and chunks. Deterministic: same text, same ids."""

import hashlib


def generate_document_id(normalized_text: str) -> str:
    """Content-addressed document id from the normalized text."""
    digest = hashlib.sha256(normalized_text.encode("utf-8")).hexdigest()[:24]
    return f"doc_{digest}"


def generate_chunk_id(document_id: str, chunk_index: int, chunk_hash: str) -> str:
    """Generate a deterministic chunk_id from document, index, and hash."""
    payload = f"{document_id}:{chunk_index}:{chunk_hash}"
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:24]
    return f"chunk_{digest}"
