"""Chunk entities.

- RagChunk: ORM row in rag_chunks holding one chunk and its pgvector embedding.
- ChunkRecord: a chunk produced by ingestion, ready to be written.
- RetrievedChunk: a chunk read back by a nearest-neighbor query (no embedding).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List

from pgvector.sqlalchemy import Vector
from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from docrag.config import settings
from docrag.db import Base


class RagChunk(Base):
    """One window of an ingested document.

    Rows are only ever written in bulk by a full corpus replacement and read by
    vector similarity; they are never updated in place.

    Notes:
        The embedding dimension comes from settings.EMBEDDING_DIM and must match
        the configured embedding model.
    """
    __tablename__ = "rag_chunks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(String(1024), nullable=False)  # file name, not full path
    chunk_index = Column(Integer, nullable=False)  # order within source
    content = Column(Text, nullable=False)
    embedding = Column(Vector(dim=settings.EMBEDDING_DIM), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_rag_chunks_source", "source"),
    )


@dataclass
class ChunkRecord:
    source: str
    chunk_index: int
    text: str
    embedding: List[float]


@dataclass(frozen=True)
class RetrievedChunk:
    source: str
    chunk_index: int
    text: str
