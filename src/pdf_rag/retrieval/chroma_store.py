"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

import chromadb

from pdf_rag.config import settings
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import IndexSpec, VectorRecord

logger = logging.getLogger(__name__)

_SPACE_MAP = {"cosine": "cosine", "dotproduct": "ip", "euclidean": "l2"}


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    index_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client (e.g. ``chromadb.EphemeralClient()``).
    """

    def __init__(
        self,
        index_name: str = settings.index_name,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any = None,
    ) -> None:
        super().__init__(index_name)
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection: Any = None
        self._space = "cosine"

    @property
    def collection(self) -> Any:
        if self._collection is None:
            self._collection = self._client.get_collection(self.index_name)
            self._space = (self._collection.metadata or {}).get("hnsw:space", "l2")
        return self._collection

    # -- VectorStoreBase overrides --------------------------------------------

    def list_indexes(self) -> list[str]:
        # Depending on the chromadb version this yields names or Collection objects.
        return [getattr(c, "name", c) for c in self._client.list_collections()]

    def create_index(self, spec: IndexSpec) -> None:
        space = _SPACE_MAP[spec.metric]
        logger.info("Creating Chroma collection %r (space=%s)", spec.name, space)
        self._collection = self._client.create_collection(
            name=spec.name,
            metadata={"hnsw:space": space},
        )
        self._space = space

    def upsert(self, records: list[VectorRecord]) -> None:
        self.collection.upsert(
            ids=[r.id for r in records],
            embeddings=[r.values for r in records],
            documents=[r.text for r in records],
            metadatas=[r.metadata for r in records],
        )

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
    ) -> list[dict[str, Any]]:
        results = self.collection.query(
            query_embeddings=[query_embedding],
            n_results=k,
            include=["documents", "metadatas", "distances"],
        )

        hits: list[dict[str, Any]] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            hits.append(
                {
                    "id": doc_id,
                    "content": content or "",
                    "score": self._to_score(dist),
                    "metadata": meta or {},
                }
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    def close(self) -> None:
        self._collection = None

    # -- internals ------------------------------------------------------------

    def _to_score(self, distance: float) -> float:
        """Convert a Chroma distance to a higher-is-better similarity."""
        if self._space == "cosine":
            return 1.0 - distance
        return 1.0 / (1.0 + distance)
