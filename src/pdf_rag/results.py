"""Outcome models returned by the provision, ingestion and query pipelines.

None of the pipeline functions raise on external-call failures.  Instead
they return one of these models so that callers can tell apart a ready
index from a failed provisioning call, a full ingestion from a partial
one, and an empty retrieval from a broken one.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ProvisionStatus(str, Enum):
    CREATED = "created"
    EXISTS = "exists"
    FAILED = "failed"


class IngestionStatus(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


class QueryStatus(str, Enum):
    ANSWERED = "answered"
    NO_MATCHES = "no_matches"
    FAILED = "failed"


class ProvisionResult(BaseModel):
    """Outcome of :func:`~pdf_rag.retrieval.provisioner.ensure_index`."""

    index_name: str
    status: ProvisionStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not ProvisionStatus.FAILED


class IngestionReport(BaseModel):
    """Outcome of a single document ingestion.

    Attributes
    ----------
    source:
        Source identifier of the ingested document.
    status:
        ``complete`` when every batch was upserted, ``partial`` when at
        least one batch landed before a failure, ``failed`` otherwise.
    chunk_count:
        Number of chunks the document was split into (0 if splitting
        never happened).
    batches_total / batches_upserted / records_upserted:
        Upsert progress.  Batches already upserted are never rolled back.
    error:
        Text of the error that stopped ingestion, if any.
    """

    source: str
    status: IngestionStatus
    chunk_count: int = 0
    batches_total: int = 0
    batches_upserted: int = 0
    records_upserted: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is IngestionStatus.COMPLETE


class SetupReport(BaseModel):
    """Provisioning plus ingestion, as run by ``POST /api/setup``.

    ``ingestion`` is ``None`` when provisioning failed and ingestion was
    skipped.
    """

    provision: ProvisionResult
    ingestion: IngestionReport | None = None

    @property
    def ok(self) -> bool:
        return self.provision.ok and self.ingestion is not None and self.ingestion.ok


class QueryAnswer(BaseModel):
    """Outcome of :func:`~pdf_rag.generation.query.answer_question`.

    ``answer`` is ``None`` for both ``no_matches`` and ``failed``; the
    ``status`` field is what distinguishes them.
    """

    question: str
    status: QueryStatus
    answer: str | None = None
    sources: list[str] = Field(default_factory=list)
    stage: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not QueryStatus.FAILED
