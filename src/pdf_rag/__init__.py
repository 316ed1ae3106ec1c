"""
pdf_rag: retrieval-augmented question answering over a single PDF.

Ingest a PDF into a vector index (Pinecone or Chroma), then answer
questions with an OpenAI chat model grounded in the retrieved chunks.
"""

__version__ = "0.1.0"
