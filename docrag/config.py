"""Application configuration and environment-driven settings.

Defines the Settings class based on pydantic-settings to centralize configuration for:
- API keys and model names
- The pgvector-backed chunk store
- Ingestion write batching
- Generation knobs
- Logging
- Optional observability (Langfuse)

Chunk geometry and the retrieval top-k ceiling are module constants in
docrag.chunking and docrag.retrieval; they are intentionally not configurable.

A warning is logged if OPENAI_API_KEY is not set when not running in Docker.
"""
import logging
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseSettings):
    """Strongly-typed application settings loaded from environment variables.

    Uses pydantic-settings to populate fields from a .env file or process env.
    """
    # Required
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")

    # Models
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_EMBEDDING_MODEL: str = "text-embedding-3-small"  # 1536 dims

    # Chunk store
    DATABASE_URL: str = "postgresql+psycopg2://rag_user:rag_pass@db:5432/rag_db"
    INSERT_BATCH_SIZE: int = Field(default=200, ge=1)

    # Generation
    MAX_OUTPUT_TOKENS: int = 500
    TEMPERATURE: float = 0.2

    # Logging
    LOG_LEVEL: str = "INFO"

    # Observability (optional)
    OTEL_CONSOLE_EXPORT: bool = False
    LANGFUSE_HOST: str = ""
    LANGFUSE_PUBLIC_KEY: str = ""
    LANGFUSE_SECRET_KEY: str = ""

    # Derived
    @property
    def EMBEDDING_DIM(self) -> int:
        """Embedding dimension for the configured embedding model.

        Returns:
            int: The vector dimension inferred from OPENAI_EMBEDDING_MODEL.
        """
        model = self.OPENAI_EMBEDDING_MODEL.lower()
        if "text-embedding-3-large" in model:
            return 3072
        # text-embedding-3-small and text-embedding-ada-002
        return 1536

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()

if os.environ.get("RUNNING_IN_DOCKER", "0") == "0" and not settings.OPENAI_API_KEY:
    logger.warning("OPENAI_API_KEY not set. Set it in .env before running load or ask.")
