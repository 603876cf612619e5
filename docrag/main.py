"""FastAPI application entrypoint and routes.

Exposes /health, /rag/load and /rag/ask, configures CORS and logging, and
initializes the database schema at startup. Handlers are plain (sync) functions
so the blocking service calls run on FastAPI's worker threads.
"""
import logging

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from docrag.config import LOG_FORMAT, settings
from docrag.db import init_db
from docrag.errors import IngestionIOError, InvalidInputError
from docrag.schemas import AskResult, LoadResult
from docrag.service import DEFAULT_TOP_K, RagService, get_service

logger = logging.getLogger(__name__)

app = FastAPI(title="docrag", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_credentials=True,
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    """Configure logging and ensure the DB schema and index exist."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    init_db()


@app.get("/health")
def health():
    """Liveness probe endpoint."""
    return {"status": "ok"}


@app.post("/rag/load", response_model=LoadResult)
def load(
    path: str = Query(..., description="File or directory to load; replaces the current corpus"),
    service: RagService = Depends(get_service),
) -> LoadResult:
    """Replace the stored corpus with the documents at ``path``."""
    try:
        return service.load(path)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except IngestionIOError as e:
        logger.exception("Load failed for %s", path)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/rag/ask", response_model=AskResult)
def ask(
    question: str = Query(..., description="Question to answer from the loaded documents"),
    top_k: int = Query(DEFAULT_TOP_K, alias="topK", description="Chunks to retrieve, clamped to 1..8"),
    service: RagService = Depends(get_service),
) -> AskResult:
    """Answer a question from the currently loaded corpus."""
    try:
        return service.ask(question, top_k)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
