"""
Retrieval: vector index provisioning, storage backends, and search.

This module wraps the vector database behind a clean interface so that
the ingestion and query pipelines never need to know which DB is backing
them.

Public surface
--------------
- :class:`VectorStoreBase`: abstract backend.
- :class:`PineconeVectorStore`: default Pinecone backend.
- :class:`ChromaVectorStore`: self-hosted Chroma backend.
- :func:`ensure_index`: create-if-absent provisioning.
- :class:`SemanticRetriever`: top-K search with citations.
- :func:`get_vector_store`: build the backend selected in settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import (
    Citation,
    IndexSpec,
    RetrievalResult,
    VectorRecord,
)
from pdf_rag.retrieval.provisioner import ensure_index
from pdf_rag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from pdf_rag.config import Settings

__all__ = [
    "ChromaVectorStore",
    "Citation",
    "IndexSpec",
    "PineconeVectorStore",
    "RetrievalResult",
    "SemanticRetriever",
    "VectorRecord",
    "VectorStoreBase",
    "ensure_index",
    "get_vector_store",
    "index_spec_from_settings",
]


def get_vector_store(config: Settings) -> VectorStoreBase:
    """Return the backend named by ``config.vector_db_type``."""
    if config.vector_db_type == "pinecone":
        from pdf_rag.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore(config.index_name, api_key=config.pinecone_api_key)
    if config.vector_db_type == "chroma":
        from pdf_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore(
            config.index_name, host=config.chroma_host, port=config.chroma_port
        )
    raise ValueError(f"Unsupported vector_db_type={config.vector_db_type!r}")


def index_spec_from_settings(config: Settings) -> IndexSpec:
    return IndexSpec(
        name=config.index_name,
        dimension=config.embedding_dimension,
        metric=config.index_metric,
        cloud=config.pinecone_cloud,
        region=config.pinecone_region,
    )


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends to avoid pulling in their SDKs at import time."""
    if name == "PineconeVectorStore":
        from pdf_rag.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore
    if name == "ChromaVectorStore":
        from pdf_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
