"""
Ingestion: document loading, chunking, and embedding into the vector store.

This module is responsible for the ETL-like pipeline that turns a PDF
into embedded chunks stored in the vector index.
"""

from pdf_rag.ingestion.chunker import chunk_document, chunk_id
from pdf_rag.ingestion.embedder import EmbeddingMismatchError, embed_chunks, get_embedding_function
from pdf_rag.ingestion.pipeline import build_records, ingest_document

__all__ = [
    "EmbeddingMismatchError",
    "build_records",
    "chunk_document",
    "chunk_id",
    "embed_chunks",
    "get_embedding_function",
    "ingest_document",
]
