"""pgvector-backed chunk store.

All statements are plain SQL over the rag_chunks table. Embeddings travel as
pgvector text literals and are cast server-side, for both inserts and queries.
Similarity is cosine distance (the <=> operator), matching the HNSW index
created by docrag.db.init_db.
"""
import logging
from typing import Dict, List, Sequence

from sqlalchemy import text
from sqlalchemy.orm import Session

from docrag.config import settings
from docrag.db import session_scope
from docrag.models import ChunkRecord, RetrievedChunk
from docrag.vectors import to_vector_literal

logger = logging.getLogger(__name__)

DELETE_ALL_SQL = text("DELETE FROM rag_chunks")
COUNT_SQL = text("SELECT COUNT(*) FROM rag_chunks")
INSERT_SQL = text(
    """
    INSERT INTO rag_chunks (source, chunk_index, content, embedding, created_at)
    VALUES (:source, :chunk_index, :content, CAST(:embedding AS vector), timezone('utc', now()))
    """
)
NEAREST_SQL = text(
    """
    SELECT source, chunk_index, content
    FROM rag_chunks
    ORDER BY embedding <=> CAST(:qvec AS vector)
    LIMIT :limit
    """
)


def _insert_params(record: ChunkRecord) -> Dict[str, object]:
    return {
        "source": record.source,
        "chunk_index": record.chunk_index,
        "content": record.text,
        "embedding": to_vector_literal(record.embedding),
    }


class PgVectorChunkStore:
    """Chunk store over PostgreSQL + pgvector.

    Args:
        batch_size: Rows per executemany round-trip when inserting; defaults to
            settings.INSERT_BATCH_SIZE.
    """

    def __init__(self, batch_size: int | None = None):
        self.batch_size = batch_size or settings.INSERT_BATCH_SIZE

    def count(self) -> int:
        with session_scope() as db:
            return int(db.execute(COUNT_SQL).scalar_one())

    def replace_all(self, records: Sequence[ChunkRecord]) -> None:
        """Swap the stored corpus for ``records``.

        Delete and inserts share one transaction: readers on other connections
        see either the old corpus or the new one, and an insert failure rolls
        the delete back.
        """
        with session_scope() as db:
            db.execute(DELETE_ALL_SQL)
            self._insert(db, records)
        logger.info("Replaced stored corpus with %d chunks", len(records))

    def nearest(self, embedding: Sequence[float], limit: int) -> List[RetrievedChunk]:
        """Return up to ``limit`` chunks ordered by ascending cosine distance."""
        with session_scope() as db:
            rows = db.execute(
                NEAREST_SQL, {"qvec": to_vector_literal(embedding), "limit": limit}
            ).mappings().all()
        return [
            RetrievedChunk(source=r["source"], chunk_index=int(r["chunk_index"]), text=r["content"])
            for r in rows
        ]

    def _insert(self, db: Session, records: Sequence[ChunkRecord]) -> None:
        for i in range(0, len(records), self.batch_size):
            batch = records[i:i + self.batch_size]
            db.execute(INSERT_SQL, [_insert_params(r) for r in batch])
            logger.debug("Inserted batch of %d chunks", len(batch))
