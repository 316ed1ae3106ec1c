"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import math
from typing import Any

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models import FakeListChatModel

from pdf_rag.config import Settings
from pdf_rag.generation.strategies import StuffedContextStrategy
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import IndexSpec, VectorRecord
from pdf_rag.service import RAGService

DIM = 8


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── In-memory vector store for deterministic testing ────────────────────


class InMemoryVectorStore(VectorStoreBase):
    """Dict-backed store recording every call; cosine similarity search."""

    def __init__(self, index_name: str = "test-index-01", fail_on_batch: int | None = None) -> None:
        super().__init__(index_name)
        self.indexes: dict[str, IndexSpec] = {}
        self.records: dict[str, VectorRecord] = {}
        self.create_calls = 0
        self.upsert_sizes: list[int] = []
        self.fail_on_batch = fail_on_batch
        self.closed = 0

    def list_indexes(self) -> list[str]:
        return list(self.indexes)

    def create_index(self, spec: IndexSpec) -> None:
        self.create_calls += 1
        self.indexes[spec.name] = spec

    def upsert(self, records: list[VectorRecord]) -> None:
        if self.fail_on_batch is not None and len(self.upsert_sizes) + 1 == self.fail_on_batch:
            raise ConnectionError("upsert rejected")
        self.upsert_sizes.append(len(records))
        for record in records:
            self.records[record.id] = record

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 10,
    ) -> list[dict[str, Any]]:
        scored = sorted(
            self.records.values(),
            key=lambda r: _cosine(query_embedding, r.values),
            reverse=True,
        )
        return [
            {
                "id": r.id,
                "content": r.text,
                "score": _cosine(query_embedding, r.values),
                "metadata": r.metadata,
            }
            for r in scored[:k]
        ]

    def health_check(self) -> bool:
        return True

    def close(self) -> None:
        self.closed += 1


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def embedder() -> DeterministicFakeEmbedding:
    return DeterministicFakeEmbedding(size=DIM)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        pinecone_api_key="pc-test",
        embedding_dimension=DIM,
        # Fake embeddings are random, so cosine scores may be negative.
        document_path="documents/sample.pdf",
    )


@pytest.fixture()
def fake_llm() -> FakeListChatModel:
    return FakeListChatModel(responses=["The document is about vector search."])


@pytest.fixture()
def service(
    memory_store: InMemoryVectorStore,
    embedder: DeterministicFakeEmbedding,
    fake_llm: FakeListChatModel,
    test_settings: Settings,
) -> RAGService:
    return RAGService(
        memory_store,
        embedder,
        StuffedContextStrategy(fake_llm),
        config=test_settings,
    )


@pytest.fixture()
def make_store() -> type[InMemoryVectorStore]:
    """Factory for stores with custom failure injection."""
    return InMemoryVectorStore
