"""Shared pytest configuration and fixtures.

The fakes stand in for the OpenAI services and the pgvector store so the
pipelines can be exercised without network or database access.
"""
import math
from typing import List, Sequence

import pytest

from docrag.models import ChunkRecord, RetrievedChunk
from docrag.service import RagService


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring PostgreSQL with pgvector")


class FakeEmbedder:
    """Letter-frequency embedder; similar texts get similar vectors."""

    def __init__(self) -> None:
        self.calls = 0

    @staticmethod
    def vector(text: str) -> List[float]:
        vec = [0.0] * 27
        for ch in text.lower():
            if "a" <= ch <= "z":
                vec[ord(ch) - ord("a")] += 1.0
        vec[26] = 1.0  # never a zero vector
        return vec

    def embed(self, text: str) -> List[float]:
        self.calls += 1
        return self.vector(text)

    def embed_many(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls += 1
        return [self.vector(t) for t in texts]


class FakeChatModel:
    model = "fake-chat"

    def __init__(self, answer: str = "fake answer") -> None:
        self.answer = answer
        self.calls: List[tuple] = []

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.answer


def _cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return 1.0 - dot / norm


class InMemoryChunkStore:
    """Chunk store keeping one corpus in a list, ranked by cosine distance."""

    def __init__(self) -> None:
        self.records: List[ChunkRecord] = []
        self.replace_calls = 0
        self.last_limit: int | None = None

    def count(self) -> int:
        return len(self.records)

    def replace_all(self, records: Sequence[ChunkRecord]) -> None:
        self.replace_calls += 1
        self.records = list(records)

    def nearest(self, embedding: Sequence[float], limit: int) -> List[RetrievedChunk]:
        self.last_limit = limit
        ranked = sorted(self.records, key=lambda r: _cosine_distance(r.embedding, embedding))
        return [
            RetrievedChunk(source=r.source, chunk_index=r.chunk_index, text=r.text)
            for r in ranked[:limit]
        ]


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def chat_model() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture
def store() -> InMemoryChunkStore:
    return InMemoryChunkStore()


@pytest.fixture
def service(embedder, chat_model, store) -> RagService:
    return RagService(embedder=embedder, llm=chat_model, store=store)
