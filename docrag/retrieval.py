"""Nearest-neighbor retrieval helpers.

This module implements:
- clamp_top_k: bound the caller's top-k into [1, MAX_TOP_K]
- retrieve: embed a question and fetch its nearest chunks from the store
- unique_sources: distinct source names in first-seen order

Ranking is whatever single distance metric the store uses (cosine for pgvector).
"""
import logging
from typing import Iterable, List

from docrag.models import RetrievedChunk

logger = logging.getLogger(__name__)

MIN_TOP_K = 1
MAX_TOP_K = 8  # hard ceiling on context size sent to the model


def clamp_top_k(top_k: int) -> int:
    """Clamp a requested top-k into [MIN_TOP_K, MAX_TOP_K]."""
    return max(MIN_TOP_K, min(int(top_k), MAX_TOP_K))


def retrieve(store, embedder, question: str, top_k: int) -> List[RetrievedChunk]:
    """Embed ``question`` and return up to ``top_k`` nearest chunks.

    Args:
        store: Chunk store exposing ``nearest(embedding, limit)``.
        embedder: Embedding service exposing ``embed(text)``.
        question: Question text.
        top_k: Already-clamped number of chunks to request.

    Returns:
        List[RetrievedChunk]: Chunks in store order (ascending distance); may be
            shorter than top_k when the store holds fewer rows.
    """
    qvec = embedder.embed(question)
    chunks = store.nearest(qvec, top_k)
    logger.debug("Retrieved %d/%d chunks", len(chunks), top_k)
    return chunks


def unique_sources(chunks: Iterable[RetrievedChunk]) -> List[str]:
    """Return each chunk's source once, in the order first seen."""
    return list(dict.fromkeys(c.source for c in chunks))
