"""Unit tests for the pgvector chunk store, with the database session mocked."""
from contextlib import contextmanager
from unittest.mock import MagicMock

import pytest

from docrag import store as store_module
from docrag.models import ChunkRecord, RetrievedChunk
from docrag.store import COUNT_SQL, DELETE_ALL_SQL, INSERT_SQL, NEAREST_SQL, PgVectorChunkStore
from docrag.vectors import to_vector_literal


@pytest.fixture
def db(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    session = MagicMock()
    scopes = []

    @contextmanager
    def fake_scope():
        scopes.append(session)
        yield session

    monkeypatch.setattr(store_module, "session_scope", fake_scope)
    session.scopes = scopes
    return session


def _records(n: int):
    return [ChunkRecord(source="a.txt", chunk_index=i, text=f"chunk {i}", embedding=[0.5, -0.25]) for i in range(n)]


def test_vector_literal_format() -> None:
    assert to_vector_literal([0.1, 0.23, -0.4]) == "[0.1,0.23,-0.4]"
    assert to_vector_literal([1, 0]) == "[1,0]"
    assert to_vector_literal([]) == "[]"


def test_replace_all_deletes_then_inserts_in_batches(db: MagicMock) -> None:
    PgVectorChunkStore(batch_size=200).replace_all(_records(450))

    calls = db.execute.call_args_list
    assert calls[0].args == (DELETE_ALL_SQL,)
    inserts = calls[1:]
    assert [c.args[0] for c in inserts] == [INSERT_SQL] * 3
    assert [len(c.args[1]) for c in inserts] == [200, 200, 50]
    assert inserts[2].args[1][-1] == {
        "source": "a.txt",
        "chunk_index": 449,
        "content": "chunk 449",
        "embedding": "[0.5,-0.25]",
    }
    # one transaction for delete + inserts
    assert len(db.scopes) == 1


def test_replace_all_with_no_records_only_deletes(db: MagicMock) -> None:
    PgVectorChunkStore().replace_all([])
    assert [c.args for c in db.execute.call_args_list] == [(DELETE_ALL_SQL,)]


def test_count(db: MagicMock) -> None:
    db.execute.return_value.scalar_one.return_value = 7
    assert PgVectorChunkStore().count() == 7
    assert db.execute.call_args.args == (COUNT_SQL,)


def test_nearest_maps_rows_in_store_order(db: MagicMock) -> None:
    db.execute.return_value.mappings.return_value.all.return_value = [
        {"source": "b.md", "chunk_index": 2, "content": "closest"},
        {"source": "a.txt", "chunk_index": 0, "content": "next"},
    ]

    result = PgVectorChunkStore().nearest([0.1, 0.2], 4)

    assert result == [
        RetrievedChunk(source="b.md", chunk_index=2, text="closest"),
        RetrievedChunk(source="a.txt", chunk_index=0, text="next"),
    ]
    assert db.execute.call_args.args == (NEAREST_SQL, {"qvec": "[0.1,0.2]", "limit": 4})


def test_batch_size_defaults_to_settings() -> None:
    from docrag.config import settings

    assert PgVectorChunkStore().batch_size == settings.INSERT_BATCH_SIZE


def test_insert_timestamps_are_utc() -> None:
    assert "timezone('utc', now())" in str(INSERT_SQL)
