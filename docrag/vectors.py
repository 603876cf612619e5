"""pgvector literal formatting."""
from typing import Sequence


def to_vector_literal(embedding: Sequence[float]) -> str:
    """Render an embedding as a pgvector text literal, e.g. ``[0.1,0.23,-0.4]``.

    Nine significant digits round-trip float32 values exactly.
    """
    return "[" + ",".join(format(float(x), ".9g") for x in embedding) + "]"
