"""Ingestion pipeline: chunk → embed → upsert in fixed-size batches.

Record ids are ``<source>_<chunk_index>``, so re-ingesting the same
document with the same chunking parameters overwrites the previous
records instead of duplicating them.  Changing ``chunk_size`` or
``chunk_overlap`` after an ingestion leaves the old records orphaned
under ids the new run no longer produces.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from pdf_rag.ingestion.chunker import chunk_document, chunk_id
from pdf_rag.ingestion.embedder import embed_chunks
from pdf_rag.results import IngestionReport, IngestionStatus
from pdf_rag.retrieval.models import VectorRecord

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from pdf_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


def build_records(
    source: str,
    chunks: list[Document],
    vectors: list[list[float]],
) -> list[VectorRecord]:
    """Pair each chunk with its vector (by position) into a ``VectorRecord``."""
    records: list[VectorRecord] = []
    for index, (chunk, vector) in enumerate(zip(chunks, vectors)):
        # Vector-store metadata values must be flat str/int/float/bool
        meta: dict[str, Any] = {
            k: v for k, v in chunk.metadata.items() if isinstance(v, (str, int, float, bool))
        }
        meta["text"] = chunk.page_content
        meta["source"] = source
        meta["loc"] = json.dumps(
            {"start": chunk.metadata.get("start_index"), "end": chunk.metadata.get("end_index")}
        )
        records.append(VectorRecord(id=chunk_id(source, index), values=vector, metadata=meta))
    return records


def batches(records: list[VectorRecord], batch_size: int) -> list[list[VectorRecord]]:
    """Split *records* into ``ceil(len / batch_size)`` consecutive batches."""
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [records[start : start + batch_size] for start in range(0, len(records), batch_size)]


def ingest_document(
    store: VectorStoreBase,
    embedder: Embeddings,
    document: Document,
    *,
    chunk_size: int = 100,
    chunk_overlap: int = 0,
    batch_size: int = 100,
    dimension: int | None = None,
) -> IngestionReport:
    """Chunk, embed and upsert *document* into *store*.

    Parameters
    ----------
    store:
        Target vector store; the index must already exist.
    embedder:
        Embedding model; called once for all chunks.
    document:
        Source document with ``metadata["source"]`` set.
    chunk_size / chunk_overlap:
        Splitting policy.
    batch_size:
        Maximum records per upsert call.
    dimension:
        Expected vector length; vectors of another length fail ingestion
        before anything is upserted.

    Returns
    -------
    IngestionReport
        ``complete``, ``partial`` (some batches upserted before an error)
        or ``failed``.  Upserted batches are never rolled back.
    """
    source = document.metadata.get("source", "unknown")
    logger.info("Processing document: %s", source)

    try:
        chunks = chunk_document(document, chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        logger.info("Text split into %d chunks", len(chunks))
        vectors = embed_chunks(embedder, chunks, dimension=dimension)
        records = build_records(source, chunks, vectors)
        planned = batches(records, batch_size)
    except Exception as exc:
        logger.exception("Ingestion of %s failed before upserting", source)
        return IngestionReport(
            source=source,
            status=IngestionStatus.FAILED,
            error=str(exc) or type(exc).__name__,
        )

    report = IngestionReport(
        source=source,
        status=IngestionStatus.COMPLETE,
        chunk_count=len(chunks),
        batches_total=len(planned),
    )

    t0 = time.monotonic()
    for number, batch in enumerate(planned, 1):
        try:
            store.upsert(batch)
        except Exception as exc:
            logger.exception(
                "Upsert of batch %d/%d for %s failed", number, len(planned), source
            )
            report.status = (
                IngestionStatus.PARTIAL if report.batches_upserted else IngestionStatus.FAILED
            )
            report.error = str(exc) or type(exc).__name__
            return report
        report.batches_upserted += 1
        report.records_upserted += len(batch)
        logger.info("  upserted batch %d/%d (%d records)", number, len(planned), len(batch))

    logger.info(
        "Index %r updated: %d vectors in %.1fs (%d batches)",
        store.index_name, report.records_upserted, time.monotonic() - t0, report.batches_upserted,
    )
    return report
