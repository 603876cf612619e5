"""Document question answering over a pgvector chunk store.

Submodules overview:
- main: FastAPI application and routes.
- cli: command-line entrypoint (init-db, load, ask).
- service: RagService, the load and ask operations and their shared lock.
- config: Application settings and environment variable loading.
- errors: Error types surfaced to callers.
- paths: Input path resolution and supported-file discovery.
- extraction: PDF/HTML/text extraction.
- chunking: Whitespace normalization and overlapping fixed-size chunks.
- embedding: OpenAI embedding service.
- generation: Prompting, context assembly and the OpenAI chat model.
- retrieval: Top-k clamping, nearest-neighbor fetch, source de-duplication.
- store: pgvector chunk store (count, replace, nearest).
- db: Database engine/session management helpers.
- models: ORM table and chunk records.
- schemas: Pydantic result models.
- vectors: pgvector literal formatting.
- obs: Observability utilities (tracing/spans).
"""
