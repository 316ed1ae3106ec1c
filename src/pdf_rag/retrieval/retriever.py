"""Semantic retriever: top-K search with citation tracking.

Usage::

    from pdf_rag.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(store, embedder, default_k=10)
    results   = retriever.search("What is this document about?")
    for r in results:
        print(r.citation.short_ref(), r.content[:80])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import Citation, RetrievalResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """High-level retriever that wraps any :class:`VectorStoreBase`.

    The query is embedded with *embedder*, which must be the same model
    that produced the stored vectors; a different model silently yields
    meaningless similarities.

    Parameters
    ----------
    store:
        A concrete vector-store backend.
    embedder:
        LangChain embeddings used to encode the query.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Minimum score; results below this are discarded.  ``None`` keeps
        every hit.  Only meaningful for metrics where higher scores mean
        more similar (``cosine``, ``dotproduct``).
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedder: Embeddings,
        *,
        default_k: int = 10,
        score_threshold: float | None = None,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def search(
        self,
        query: str,
        *,
        k: int | None = None,
    ) -> list[RetrievalResult]:
        """Run a semantic search and return results with citations.

        Parameters
        ----------
        query:
            Natural-language query string.
        k:
            Number of results (defaults to ``self.default_k``).

        Returns
        -------
        list[RetrievalResult]
            Results in the order the store ranked them (most similar first).
        """
        embedding = self._embedder.embed_query(query)
        return self.search_by_embedding(embedding, k=k)

    def search_by_embedding(
        self,
        embedding: list[float],
        *,
        k: int | None = None,
    ) -> list[RetrievalResult]:
        """Same as :meth:`search` but accepts a pre-computed embedding."""
        k = k or self.default_k
        raw_hits = self._store.similarity_search(embedding, k=k)
        results = self._to_results(raw_hits)
        logger.info("Retrieved %d of %d hits (k=%d)", len(results), len(raw_hits), k)
        return results

    # -- internals ------------------------------------------------------------

    def _to_results(self, raw_hits: list[dict[str, Any]]) -> list[RetrievalResult]:
        results: list[RetrievalResult] = []
        for hit in raw_hits:
            score = hit.get("score")
            threshold = self.score_threshold
            if threshold is not None and score is not None and score < threshold:
                continue

            meta = hit.get("metadata", {})
            citation = Citation(
                document_id=hit.get("id"),
                source=meta.get("source", "unknown"),
                chunk_index=meta.get("chunk_index"),
                score=score,
                metadata=meta,
            )
            results.append(RetrievalResult(content=hit.get("content", ""), citation=citation))
        return results
