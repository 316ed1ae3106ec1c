"""RAG service handle: one explicitly constructed bundle of clients.

A :class:`RAGService` owns the vector-store client, the embedding model,
the retriever and the generation strategy.  It is built once (at app
startup or per CLI invocation), passed to whoever needs it, and closed
when done::

    with RAGService.from_settings(settings) as service:
        service.setup()
        print(service.answer("What is this document about?").answer)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pdf_rag.config import Settings, settings
from pdf_rag.generation.query import answer_question
from pdf_rag.ingestion.loader import load_pdf_document
from pdf_rag.ingestion.pipeline import ingest_document
from pdf_rag.results import (
    IngestionReport,
    IngestionStatus,
    ProvisionResult,
    QueryAnswer,
    SetupReport,
)
from pdf_rag.retrieval import get_vector_store, index_spec_from_settings
from pdf_rag.retrieval.provisioner import ensure_index
from pdf_rag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from pdf_rag.generation.strategies import GenerationStrategy
    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class RAGService:
    """Provision, ingest and query against one vector index.

    Parameters
    ----------
    store:
        Vector-store backend shared by every operation.
    embedder:
        Embedding model used for both chunks and questions.
    generator:
        Answer-generation strategy.
    config:
        Settings providing index spec, chunking, batching and top-K.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedder: Embeddings,
        generator: GenerationStrategy,
        *,
        config: Settings = settings,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.generator = generator
        self.config = config
        self.retriever = SemanticRetriever(
            store,
            embedder,
            default_k=config.retrieval_k,
            score_threshold=config.score_threshold,
        )
        self._closed = False

    @classmethod
    def from_settings(cls, config: Settings = settings) -> RAGService:
        """Build every client from *config*."""
        from pdf_rag.generation.llm import get_llm
        from pdf_rag.generation.strategies import get_generation_strategy
        from pdf_rag.ingestion.embedder import get_embedding_function

        generator = get_generation_strategy(config.generation_strategy, get_llm(config))
        return cls(
            get_vector_store(config),
            get_embedding_function(config),
            generator,
            config=config,
        )

    # -- lifecycle -------------------------------------------------------------

    def close(self) -> None:
        if not self._closed:
            self.store.close()
            self._closed = True
            logger.info("RAG service closed")

    def __enter__(self) -> RAGService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- operations ------------------------------------------------------------

    def provision(self) -> ProvisionResult:
        return ensure_index(self.store, index_spec_from_settings(self.config))

    def ingest(self, document: Document) -> IngestionReport:
        return ingest_document(
            self.store,
            self.embedder,
            document,
            chunk_size=self.config.chunk_size,
            chunk_overlap=self.config.chunk_overlap,
            batch_size=self.config.upsert_batch_size,
            dimension=self.config.embedding_dimension,
        )

    def ingest_file(self, path: str | Path) -> IngestionReport:
        """Load the PDF at *path* and ingest it; load errors give a failed report."""
        try:
            document = load_pdf_document(path)
        except Exception as exc:
            logger.exception("Loading %s failed", path)
            return IngestionReport(
                source=str(path),
                status=IngestionStatus.FAILED,
                error=str(exc) or type(exc).__name__,
            )
        return self.ingest(document)

    def setup(self, path: str | Path | None = None) -> SetupReport:
        """Provision the index, then ingest the document at *path*.

        Ingestion is skipped when provisioning failed.
        """
        provision = self.provision()
        if not provision.ok:
            logger.error("Skipping ingestion: index %r unavailable", provision.index_name)
            return SetupReport(provision=provision)
        return SetupReport(
            provision=provision,
            ingestion=self.ingest_file(path or self.config.document_path),
        )

    def answer(self, question: str) -> QueryAnswer:
        return answer_question(
            self.retriever, self.generator, question, k=self.config.retrieval_k
        )

    def health(self) -> bool:
        return self.store.health_check()
