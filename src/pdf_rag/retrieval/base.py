"""Abstract base class for vector-store backends.

Adding a new backend (Weaviate, Qdrant …) only requires subclassing
:class:`VectorStoreBase` and implementing the abstract methods.  The
provisioner, ingestion pipeline and retriever are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pdf_rag.retrieval.models import IndexSpec, VectorRecord


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    index_name:
        Logical name of the index / collection.
    """

    def __init__(self, index_name: str) -> None:
        self.index_name = index_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def list_indexes(self) -> list[str]:
        """Return the names of every index the backend currently holds."""
        ...

    @abstractmethod
    def create_index(self, spec: IndexSpec) -> None:
        """Create the index described by *spec*."""
        ...

    @abstractmethod
    def upsert(self, records: list[VectorRecord]) -> None:
        """Insert or overwrite *records* by id in a single call."""
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
    ) -> list[dict[str, Any]]:
        """Return the top-*k* results matching *query_embedding*.

        Each result dict **must** contain at least:

        * ``"id"`` – chunk identifier
        * ``"content"`` – the chunk text
        * ``"score"`` – the backend's raw match score
        * ``"metadata"`` – stored metadata dict

        Results are ordered most similar first.  How ``score`` reads depends
        on the index metric: for ``cosine`` and ``dotproduct`` higher means
        more similar, while Pinecone reports a distance for ``euclidean``.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def has_index(self, name: str) -> bool:
        return name in self.list_indexes()

    def close(self) -> None:
        """Release client handles.  Safe to call more than once."""
