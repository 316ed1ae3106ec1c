"""
Serving: FastAPI application for the RAG pipeline.

Exposes ``POST /api/setup`` and ``POST /api/query`` plus health probes.
"""
