"""Domain models for index provisioning, vector records, and retrieval results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal
from uuid import uuid4

from langchain_core.documents import Document
from pydantic import BaseModel, Field

Metric = Literal["cosine", "dotproduct", "euclidean"]


class IndexSpec(BaseModel):
    """Everything needed to create a vector index.

    Attributes
    ----------
    name:
        Index / collection name, e.g. ``"test-index-01"``.
    dimension:
        Vector length; must equal the embedding model's output size.
    metric:
        Similarity function the index is built with.
    cloud / region:
        Serverless hosting location (ignored by backends without one).
    """

    name: str = Field(min_length=1)
    dimension: int = Field(gt=0)
    metric: Metric = "cosine"
    cloud: str = "aws"
    region: str = "us-east-1"


class VectorRecord(BaseModel):
    """One ``(id, vector, metadata)`` triple destined for the index."""

    id: str
    values: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.metadata.get("text", "")


class Citation(BaseModel):
    """Provenance record linking a retrieved chunk back to its source document.

    Attributes
    ----------
    citation_id:
        Unique identifier for this citation instance.
    document_id:
        The vector-store ID of the chunk (``None`` when unknown).
    source:
        Source locator, here the path of the ingested PDF.
    chunk_index:
        Ordinal position of the chunk within the source document.
    score:
        Similarity score returned by the vector store.
    metadata:
        Everything stored alongside the vector.
    retrieved_at:
        UTC timestamp of when the retrieval happened.
    """

    citation_id: str = Field(default_factory=lambda: uuid4().hex[:12])
    document_id: str | None = None
    source: str = "unknown"
    chunk_index: int | None = None
    score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    retrieved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def short_ref(self) -> str:
        """Return a compact ``[source§chunk]`` reference string."""
        chunk = self.chunk_index if self.chunk_index is not None else "?"
        return f"[{self.source}§{chunk}]"


class RetrievalResult(BaseModel):
    """A single retrieved chunk together with its citation."""

    content: str
    citation: Citation

    def to_document(self) -> Document:
        """Wrap the chunk as a LangChain ``Document`` for generation chains."""
        return Document(
            page_content=self.content,
            metadata={**self.citation.metadata, "score": self.citation.score},
        )

    def __str__(self) -> str:  # noqa: D105
        return f"{self.citation.short_ref()} {self.content[:120]}…"
