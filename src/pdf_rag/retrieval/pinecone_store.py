"""Pinecone implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

from pinecone import Pinecone, ServerlessSpec

from pdf_rag.config import settings
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import IndexSpec, VectorRecord

logger = logging.getLogger(__name__)


class PineconeVectorStore(VectorStoreBase):
    """Pinecone-backed vector store.

    Parameters
    ----------
    index_name:
        Name of the Pinecone index.
    api_key:
        Pinecone API key.
    client:
        Pre-built ``Pinecone`` client; when given, *api_key* is ignored.
    """

    def __init__(
        self,
        index_name: str = settings.index_name,
        *,
        api_key: str = settings.pinecone_api_key,
        client: Pinecone | None = None,
    ) -> None:
        super().__init__(index_name)
        self._client = client if client is not None else Pinecone(api_key=api_key)
        self._index: Any = None

    @property
    def index(self) -> Any:
        # The index handle is resolved lazily so that a store can be built
        # before provisioning has created the index.
        if self._index is None:
            self._index = self._client.Index(self.index_name)
        return self._index

    # -- VectorStoreBase overrides --------------------------------------------

    def list_indexes(self) -> list[str]:
        return list(self._client.list_indexes().names())

    def create_index(self, spec: IndexSpec) -> None:
        logger.info(
            "Creating Pinecone index %r (dim=%d, metric=%s, %s/%s)",
            spec.name, spec.dimension, spec.metric, spec.cloud, spec.region,
        )
        self._client.create_index(
            name=spec.name,
            dimension=spec.dimension,
            metric=spec.metric,
            spec=ServerlessSpec(cloud=spec.cloud, region=spec.region),
        )

    def upsert(self, records: list[VectorRecord]) -> None:
        self.index.upsert(
            vectors=[
                {"id": r.id, "values": r.values, "metadata": r.metadata}
                for r in records
            ]
        )

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
    ) -> list[dict[str, Any]]:
        response = self.index.query(vector=query_embedding, top_k=k, include_metadata=True)

        hits: list[dict[str, Any]] = []
        for match in response.matches:
            meta = dict(match.metadata or {})
            hits.append(
                {
                    "id": match.id,
                    "content": meta.get("text", ""),
                    "score": match.score,
                    "metadata": meta,
                }
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.list_indexes()
            return True
        except Exception:
            logger.warning("Pinecone health-check failed", exc_info=True)
            return False

    def close(self) -> None:
        self._index = None
