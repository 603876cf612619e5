"""Whitespace normalization and fixed-size character chunking with overlap.

Chunk geometry is fixed for the whole corpus so that a reload of unchanged
documents reproduces identical chunks.
"""
import re
from typing import List

CHUNK_SIZE = 1200
CHUNK_OVERLAP = 200

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse every whitespace run to a single space and trim the ends."""
    return _WHITESPACE.sub(" ", text or "").strip()


def chunk_text(text: str) -> List[str]:
    """Split text into overlapping windows of CHUNK_SIZE characters.

    The text is normalized first. Each window starts CHUNK_OVERLAP characters
    before the previous one ended; the last window may be shorter.

    Args:
        text: Raw extracted text.

    Returns:
        List[str]: Windows in order, or an empty list for blank text.
    """
    normalized = normalize_text(text)
    if not normalized:
        return []
    chunks: List[str] = []
    start = 0
    n = len(normalized)
    while start < n:
        end = min(n, start + CHUNK_SIZE)
        chunks.append(normalized[start:end])
        if end == n:
            break
        start = max(0, end - CHUNK_OVERLAP)
    return chunks
