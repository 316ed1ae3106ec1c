"""Document loaders: thin wrappers around LangChain document loaders."""

from __future__ import annotations

from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader
from langchain_core.documents import Document


def load_pdf(path: str | Path) -> list[Document]:
    """Load a single PDF file, one ``Document`` per page."""
    return PyPDFLoader(str(path)).load()


def load_pdf_document(path: str | Path) -> Document:
    """Load a PDF as ONE document covering every page.

    Page texts are joined with newlines so that chunk offsets refer to a
    single continuous text.  ``metadata["source"]`` is the path as given,
    which becomes the prefix of every chunk id.
    """
    pages = load_pdf(path)
    text = "\n".join(page.page_content for page in pages)
    return Document(
        page_content=text,
        metadata={"source": str(path), "total_pages": len(pages)},
    )
