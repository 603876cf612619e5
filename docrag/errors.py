"""Error types raised by the ingestion and retrieval pipelines.

- RagError: common base class.
- InvalidInputError: caller supplied something unusable (bad path, blank
  question, unsupported single file, empty corpus on ask). Maps to HTTP 400.
- IngestionIOError: an OSError while walking the input path. Raised before the
  chunk store is touched, so the previously loaded corpus survives.

Store (SQLAlchemy) and model (OpenAI) errors are not wrapped and propagate as-is.
"""


class RagError(Exception):
    """Base class for errors raised by docrag."""


class InvalidInputError(RagError, ValueError):
    """The request cannot be served with the given input."""


class IngestionIOError(RagError):
    """Reading the input path failed while discovering files."""
