"""Ingestion and question-answering over a single replaceable chunk corpus.

RagService exposes the two operations the API and CLI call:
- load: resolve a path, extract and chunk every supported file, embed the
  chunks and replace the whole stored corpus with them.
- ask: embed a question, fetch its nearest chunks and have the language model
  answer from them alone.

Both operations hold one lock for their full duration, so an ask never sees a
corpus that is being replaced and two loads never interleave.
"""
import logging
import threading
from typing import List

from docrag.chunking import chunk_text
from docrag.embedding import OpenAIEmbedder
from docrag.errors import InvalidInputError
from docrag.extraction import extract_text
from docrag.generation import SYSTEM_PROMPT, OpenAIChatModel, build_context, build_user_prompt
from docrag.models import ChunkRecord
from docrag.obs import Trace, span
from docrag.paths import discover_files, resolve_path
from docrag.retrieval import clamp_top_k, retrieve, unique_sources
from docrag.schemas import AskResult, LoadResult
from docrag.store import PgVectorChunkStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 4


class RagService:
    """Load documents into the chunk store and answer questions from it.

    Args:
        embedder: Embedding service with ``embed`` and ``embed_many``.
        llm: Language model service with ``complete(system_prompt, user_prompt)``.
        store: Chunk store with ``count``, ``replace_all`` and ``nearest``.
    """

    def __init__(self, embedder=None, llm=None, store=None):
        self.embedder = embedder or OpenAIEmbedder()
        self.llm = llm or OpenAIChatModel()
        self.store = store or PgVectorChunkStore()
        self._lock = threading.Lock()

    def load(self, path: str) -> LoadResult:
        """Replace the stored corpus with the documents found at ``path``.

        Files whose extraction fails or yields only whitespace are skipped and
        not counted. Nothing is written until every file has been embedded, so
        a failure before the replace step leaves the previous corpus intact.

        Args:
            path: File or directory, optionally wrapped in one pair of quotes.

        Returns:
            LoadResult: Loaded file count, chunk count and absolute source paths.

        Raises:
            InvalidInputError: Blank, nonexistent or unsupported path.
            IngestionIOError: The directory could not be walked.
        """
        with self._lock, span("rag.load") as current:
            root = resolve_path(path)
            files = discover_files(root)

            records: List[ChunkRecord] = []
            sources: List[str] = []
            for file in files:
                chunks = chunk_text(extract_text(file))
                if not chunks:
                    logger.debug("Skipping %s: no text extracted", file)
                    continue
                vectors = self.embedder.embed_many(chunks)
                for i, (content, vector) in enumerate(zip(chunks, vectors, strict=True)):
                    records.append(
                        ChunkRecord(source=file.name, chunk_index=i, text=content, embedding=vector)
                    )
                sources.append(str(file.absolute()))
                logger.debug("Prepared %s -> %d chunks", file.name, len(chunks))

            self.store.replace_all(records)

            current.set_attribute("rag.files", len(sources))
            current.set_attribute("rag.chunks", len(records))
            logger.info(
                "Loaded %d files (%d chunks) from %s (%d candidates)",
                len(sources), len(records), root, len(files),
            )
            return LoadResult(loaded_files=len(sources), loaded_chunks=len(records), sources=sources)

    def ask(self, question: str, top_k: int = DEFAULT_TOP_K) -> AskResult:
        """Answer ``question`` from the nearest stored chunks.

        Args:
            question: Natural-language question.
            top_k: Requested number of chunks; clamped into [1, 8].

        Returns:
            AskResult: Answer, distinct sources in retrieval order, matched chunk count.

        Raises:
            InvalidInputError: Blank question, or no documents loaded.
        """
        with self._lock, span("rag.ask") as current:
            if question is None or not question.strip():
                raise InvalidInputError("question is required")
            # Checked before embedding so an empty corpus costs no API call
            if self.store.count() == 0:
                raise InvalidInputError("no documents loaded; load documents first using /rag/load")

            k = clamp_top_k(top_k)
            trace = Trace("ask", input={"question": question, "top_k": k})
            try:
                chunks = retrieve(self.store, self.embedder, question, k)
                trace.event("retrieval_result", {"matched_chunks": len(chunks)})

                user_prompt = build_user_prompt(question, build_context(chunks))
                answer = self.llm.complete(SYSTEM_PROMPT, user_prompt)
            except Exception as e:
                trace.end(output={"error": str(e)})
                raise
            sources = unique_sources(chunks)

            trace.generation(
                "answer",
                prompt=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                output=answer,
                model=getattr(self.llm, "model", None),
                metadata={"chunks": len(chunks)},
            )
            trace.end(output={"sources": sources, "matched_chunks": len(chunks)})
            current.set_attribute("rag.top_k", k)
            current.set_attribute("rag.matched_chunks", len(chunks))
            logger.info("Answered question with %d chunks from %d sources", len(chunks), len(sources))
            return AskResult(answer=answer, sources=sources, matched_chunks=len(chunks))


_service: RagService | None = None
_service_init_lock = threading.Lock()


def get_service() -> RagService:
    """Return the process-wide RagService with the default collaborators.

    There must be exactly one instance, since its lock is what serializes
    every load and ask in the process.
    """
    global _service
    with _service_init_lock:
        if _service is None:
            _service = RagService()
        return _service
