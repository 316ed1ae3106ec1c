"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key used for chat and embeddings")
    llm_model_name: str = Field(default="gpt-3.5-turbo-0125", description="Chat model identifier")
    llm_temperature: float = 0.0
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible chat API. Leave empty to use "
            "OpenAI cloud."
        ),
    )

    # Embedding
    embedding_provider: Literal["openai", "huggingface"] = "openai"
    embedding_model: str = "text-embedding-ada-002"
    embedding_dimension: int = Field(default=1536, gt=0)

    # Vector store
    vector_db_type: Literal["pinecone", "chroma"] = "pinecone"
    pinecone_api_key: str = Field(default="", description="Pinecone API key")
    pinecone_cloud: str = "aws"
    pinecone_region: str = "us-east-1"
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    index_name: str = "test-index-01"
    index_metric: Literal["cosine", "dotproduct", "euclidean"] = "cosine"

    # Ingestion
    document_path: str = "documents/sample.pdf"
    chunk_size: int = Field(default=100, gt=0)
    chunk_overlap: int = Field(default=0, ge=0)
    upsert_batch_size: int = Field(default=100, gt=0)

    # Query
    retrieval_k: int = Field(default=10, gt=0)
    score_threshold: float | None = None
    generation_strategy: Literal["stuffed", "retriever_chain"] = "stuffed"

    # Serving
    strict_errors: bool = Field(
        default=False,
        description=(
            "When true, /api/setup and /api/query answer 502 if the pipeline "
            "did not complete instead of reporting success."
        ),
    )
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton: import `settings` wherever needed.
settings = Settings()
