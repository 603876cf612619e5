"""Database setup and session utilities for SQLAlchemy.

This module centralizes engine/session initialization, metadata base, and helpers:
- init_db: Ensures the pgvector extension exists and creates the rag_chunks table
  and, when the embedding width allows it, an HNSW cosine index over
  rag_chunks.embedding.
- session_scope: Context-managed transactional scope for imperative workflows.

Configuration is read from docrag.config.settings.DATABASE_URL.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from docrag.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()

# pgvector refuses HNSW and IVFFLAT indexes on wider vector columns
MAX_INDEXED_DIM = 2000


def init_db() -> None:
    """Initialize the vector extension, the chunk table and its vector index.

    Idempotent; safe to run on every startup.
    """
    with engine.connect() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        conn.commit()

    # Import models after Base is defined
    from docrag import models  # noqa: F401

    Base.metadata.create_all(bind=engine)

    if settings.EMBEDDING_DIM > MAX_INDEXED_DIM:
        logger.warning(
            "Embedding dim %d exceeds the pgvector index limit of %d; "
            "nearest-neighbour queries will use an exact scan",
            settings.EMBEDDING_DIM, MAX_INDEXED_DIM,
        )
    else:
        # HNSW keeps recall usable on small tables, unlike an IVFFLAT index built
        # before any rows exist. Ops class must match the <=> operator in store.py.
        with engine.connect() as conn:
            conn.execute(
                text(
                    """
                    CREATE INDEX IF NOT EXISTS idx_rag_chunks_embedding_hnsw
                    ON rag_chunks USING hnsw (embedding vector_cosine_ops)
                    """
                )
            )
            conn.commit()
    logger.info("Database schema ready (embedding dim=%d)", settings.EMBEDDING_DIM)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Yields:
        Session: A SQLAlchemy session bound to the configured engine.

    Notes:
        - Commits on successful exit.
        - Rolls back and re-raises on exception.
        - Always closes the session at the end.
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
