"""Pydantic result schemas returned by the service, API and CLI.

- LoadResult: outcome of replacing the corpus from a path.
- AskResult: synthesized answer with its sources.

Fields are snake_case in Python and camelCase on the wire.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class LoadResult(BaseModel):
    """Outcome of a load.

    Attributes:
        loaded_files: Files that produced at least one chunk.
        loaded_chunks: Total chunks now stored.
        sources: Absolute paths of the loaded files, in discovery order.
    """
    model_config = ConfigDict(populate_by_name=True)

    loaded_files: int = Field(alias="loadedFiles")
    loaded_chunks: int = Field(alias="loadedChunks")
    sources: List[str] = Field(default_factory=list)


class AskResult(BaseModel):
    """Answer to a question.

    Attributes:
        answer: Model output grounded on the retrieved chunks.
        sources: Distinct source file names of the retrieved chunks, first-seen order.
        matched_chunks: Number of chunks retrieved (at most the clamped top-k).
    """
    model_config = ConfigDict(populate_by_name=True)

    answer: str
    sources: List[str] = Field(default_factory=list)
    matched_chunks: int = Field(alias="matchedChunks")
