"""Answer synthesis from retrieved chunks using OpenAI chat completions.

Provides:
- SYSTEM_PROMPT: instruction restricting the model to the supplied context
- build_context: labeled context block in retrieval order
- build_user_prompt: question plus context, verbatim
- OpenAIChatModel: language model service exposing complete(system, user)

Configuration is read from docrag.config.settings.
"""
from typing import Iterable

from openai import OpenAI

from docrag.config import settings
from docrag.models import RetrievedChunk

SYSTEM_PROMPT = (
    "You are a RAG assistant. Use only the provided context to answer.\n"
    "If the answer is not in the context, say you don't have enough context.\n"
    "Keep the answer concise and include source names at the end.\n"
)

_client: OpenAI | None = None


def get_client() -> OpenAI:
    """Return a cached OpenAI client using the configured API key."""
    global _client
    if _client is None:
        _client = OpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


def build_context(chunks: Iterable[RetrievedChunk]) -> str:
    """Concatenate chunks into one context block, keeping the given order.

    Each chunk becomes ``"Source: <source> | Chunk: <index>\\n<text>\\n\\n"``.
    """
    return "".join(
        f"Source: {c.source} | Chunk: {c.chunk_index}\n{c.text}\n\n" for c in chunks
    )


def build_user_prompt(question: str, context: str) -> str:
    return f"Question:\n{question}\n\nContext:\n{context}"


class OpenAIChatModel:
    """Language model service backed by OpenAI chat completions."""

    def __init__(self, model: str | None = None, max_tokens: int | None = None):
        self.model = model or settings.OPENAI_MODEL
        self.max_tokens = max_tokens or settings.MAX_OUTPUT_TOKENS

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run one system+user exchange and return the reply text.

        Args:
            system_prompt: Instruction message.
            user_prompt: User message.

        Returns:
            str: The stripped completion, or "" if the model returned no content.
        """
        resp = get_client().chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=settings.TEMPERATURE,
            max_tokens=self.max_tokens,
        )
        content = resp.choices[0].message.content or ""
        return content.strip()
