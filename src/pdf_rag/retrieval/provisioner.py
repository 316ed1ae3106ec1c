"""Create-if-absent provisioning of the vector index."""

from __future__ import annotations

import logging

from pdf_rag.results import ProvisionResult, ProvisionStatus
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import IndexSpec

logger = logging.getLogger(__name__)


def ensure_index(store: VectorStoreBase, spec: IndexSpec) -> ProvisionResult:
    """Make sure the index described by *spec* exists in *store*.

    Lists the existing indexes and creates ``spec.name`` only when it is
    missing, so calling this repeatedly issues at most one create call.
    Some providers provision asynchronously; a ``created`` result does not
    guarantee the index is already serving queries.

    Errors from the list or create call are logged and returned as a
    ``failed`` result rather than raised.
    """
    try:
        if store.has_index(spec.name):
            logger.info("Index %r already exists", spec.name)
            return ProvisionResult(index_name=spec.name, status=ProvisionStatus.EXISTS)

        store.create_index(spec)
    except Exception as exc:
        logger.exception("Provisioning index %r failed", spec.name)
        return ProvisionResult(
            index_name=spec.name,
            status=ProvisionStatus.FAILED,
            error=str(exc) or type(exc).__name__,
        )

    logger.info("Created index %r", spec.name)
    return ProvisionResult(index_name=spec.name, status=ProvisionStatus.CREATED)
