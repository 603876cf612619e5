"""Embedding service wrapping OpenAI's embeddings API.

Provides:
- get_client: Cached OpenAI client using the configured API key.
- OpenAIEmbedder: embed (single text) and embed_many (ordered batch).

Models and dimensions are configured via docrag.config.settings.
"""
from typing import List, Sequence

from openai import OpenAI

from docrag.config import settings

# Inputs per embeddings request; the API caps a single request at 2048 inputs.
REQUEST_BATCH_SIZE = 256

_client: OpenAI | None = None


def get_client() -> OpenAI:
    """Return a cached OpenAI client initialized with the configured API key.

    Returns:
        OpenAI: A singleton-like client instance reused across calls.
    """
    global _client
    if _client is None:
        _client = OpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


class OpenAIEmbedder:
    """Embedding service backed by the configured OpenAI embedding model."""

    def __init__(self, model: str | None = None):
        self.model = model or settings.OPENAI_EMBEDDING_MODEL

    def embed(self, text: str) -> List[float]:
        """Embed a single string and return its vector."""
        resp = get_client().embeddings.create(model=self.model, input=[text])
        return resp.data[0].embedding

    def embed_many(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed a batch of strings.

        Args:
            texts: Inputs to embed.

        Returns:
            List[List[float]]: One vector per input, in input order.
        """
        vectors: List[List[float]] = []
        client = get_client()
        for i in range(0, len(texts), REQUEST_BATCH_SIZE):
            batch = list(texts[i:i + REQUEST_BATCH_SIZE])
            resp = client.embeddings.create(model=self.model, input=batch)
            # The API echoes an index per item; don't rely on response order
            vectors.extend(d.embedding for d in sorted(resp.data, key=lambda d: d.index))
        return vectors
