"""Embedding model factory and batched chunk embedding."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_openai import OpenAIEmbeddings

from pdf_rag.config import Settings, settings

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class EmbeddingMismatchError(ValueError):
    """The provider returned the wrong number or size of vectors."""


def get_embedding_function(config: Settings = settings) -> Embeddings:
    """Return the configured embedding model.

    ``openai`` (default) produces 1536-dimension vectors with
    ``text-embedding-ada-002``.  ``huggingface`` needs the optional
    ``huggingface`` extra and a matching ``embedding_dimension``.
    """
    if config.embedding_provider == "openai":
        return OpenAIEmbeddings(model=config.embedding_model, api_key=config.openai_api_key)
    if config.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=config.embedding_model)
    raise ValueError(f"Unsupported embedding_provider={config.embedding_provider!r}")


def embed_chunks(
    embedder: Embeddings,
    chunks: list[Document],
    dimension: int | None = None,
) -> list[list[float]]:
    """Embed every chunk in ONE provider call.

    Newlines are replaced by spaces before embedding.  The returned list
    corresponds to *chunks* by position.

    Raises
    ------
    EmbeddingMismatchError
        When the vector count differs from the chunk count, or a vector's
        length differs from *dimension*.
    """
    if not chunks:
        return []

    texts = [chunk.page_content.replace("\n", " ") for chunk in chunks]
    logger.info("Embedding %d chunks", len(texts))
    vectors = embedder.embed_documents(texts)

    if len(vectors) != len(chunks):
        raise EmbeddingMismatchError(
            f"Expected {len(chunks)} embeddings, provider returned {len(vectors)}"
        )
    if dimension is not None:
        for i, vector in enumerate(vectors):
            if len(vector) != dimension:
                raise EmbeddingMismatchError(
                    f"Embedding {i} has dimension {len(vector)}, index expects {dimension}"
                )
    return vectors
