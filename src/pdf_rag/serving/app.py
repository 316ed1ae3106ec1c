"""FastAPI application exposing setup and query over HTTP."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from pdf_rag.config import settings
from pdf_rag.logging_config import configure_logging
from pdf_rag.results import QueryStatus
from pdf_rag.service import RAGService

logger = logging.getLogger(__name__)

SETUP_MESSAGE = "successfully created index and loaded data into the vector store..."


# ── Request / Response schemas ────────────────────────────────────────
class DataResponse(BaseModel):
    """Envelope shared by both API routes; ``data`` is null when there is no answer."""

    data: str | None = None


# ── Dependencies ──────────────────────────────────────────────────────
def get_service(request: Request) -> RAGService:
    return request.app.state.service


ServiceDep = Annotated[RAGService, Depends(get_service)]


def create_app(service: RAGService | None = None) -> FastAPI:
    """Create the application.

    When *service* is ``None`` one is built from the global settings at
    startup and closed at shutdown; an injected service is left to its
    owner to close.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        owned = service is None
        app.state.service = RAGService.from_settings(settings) if owned else service
        logger.info("RAG service ready (index=%r)", app.state.service.config.index_name)
        try:
            yield
        finally:
            if owned:
                app.state.service.close()

    app = FastAPI(
        title="PDF RAG API",
        version="0.1.0",
        description="Ingest a PDF into a vector index and answer questions grounded in it.",
        lifespan=lifespan,
    )

    # ── Routes ────────────────────────────────────────────────────────
    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/ready")
    def ready(service: ServiceDep) -> dict[str, str]:
        """Readiness probe: checks the vector store is reachable."""
        if not service.health():
            raise HTTPException(status_code=503, detail="vector store unavailable")
        return {"status": "ready"}

    @app.post("/api/setup", response_model=DataResponse)
    def setup(service: ServiceDep) -> DataResponse:
        """Provision the index and ingest the configured document."""
        report = service.setup()
        if not report.ok:
            logger.error("Setup did not complete: %s", report.model_dump_json())
            if service.config.strict_errors:
                raise HTTPException(status_code=502, detail=report.model_dump(mode="json"))
        return DataResponse(data=SETUP_MESSAGE)

    @app.post("/api/query", response_model=DataResponse)
    def query(service: ServiceDep, question: Annotated[str, Body()]) -> DataResponse:
        """Answer a JSON-string question; ``data`` is null when nothing matched."""
        logger.info("Query received: %r", question)
        result = service.answer(question)
        if result.status is QueryStatus.FAILED and service.config.strict_errors:
            raise HTTPException(status_code=502, detail=result.model_dump(mode="json"))
        return DataResponse(data=result.answer)

    return app


app = create_app()
