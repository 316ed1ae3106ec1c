"""Query pipeline: retrieve top-K chunks, then generate a grounded answer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdf_rag.results import QueryAnswer, QueryStatus

if TYPE_CHECKING:
    from pdf_rag.generation.strategies import GenerationStrategy
    from pdf_rag.retrieval.retriever import SemanticRetriever

logger = logging.getLogger(__name__)


def answer_question(
    retriever: SemanticRetriever,
    generator: GenerationStrategy,
    question: str,
    *,
    k: int | None = None,
) -> QueryAnswer:
    """Answer *question* from the indexed document.

    When the search returns no matches the generator is not invoked and
    the result is ``no_matches`` with no answer, a valid empty result.
    Errors during retrieval or generation are logged and reported as
    ``failed`` with the ``stage`` that broke.
    """
    try:
        results = retriever.search(question, k=k)
    except Exception as exc:
        logger.exception("Retrieval failed for question %r", question)
        return QueryAnswer(
            question=question,
            status=QueryStatus.FAILED,
            stage="retrieval",
            error=str(exc) or type(exc).__name__,
        )

    if not results:
        logger.info("No matches for question %r; skipping generation", question)
        return QueryAnswer(question=question, status=QueryStatus.NO_MATCHES)

    sources = [r.citation.short_ref() for r in results]
    try:
        answer = generator.generate(question, [r.to_document() for r in results])
    except Exception as exc:
        logger.exception("Generation failed for question %r", question)
        return QueryAnswer(
            question=question,
            status=QueryStatus.FAILED,
            sources=sources,
            stage="generation",
            error=str(exc) or type(exc).__name__,
        )

    logger.info("Generated answer (%d chars) from %d chunks", len(answer), len(results))
    return QueryAnswer(
        question=question,
        status=QueryStatus.ANSWERED,
        answer=answer,
        sources=sources,
    )
