"""Text chunking strategy."""

from __future__ import annotations

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

SEPARATORS = ["\n\n", "\n", ". ", " ", ""]
# Character windows; the only separator that yields an exact overlap.
OVERLAP_SEPARATORS = [""]


def chunk_document(
    document: Document,
    chunk_size: int = 100,
    chunk_overlap: int = 0,
) -> list[Document]:
    """Split *document* into ordered, position-tagged chunks.

    Separators stay attached to the text and whitespace is not stripped,
    so with ``chunk_overlap=0`` the chunk texts concatenate back to the
    original text exactly.  With a positive overlap the text is cut into
    plain character windows and every pair of adjacent chunks shares
    exactly *chunk_overlap* characters.

    Parameters
    ----------
    document:
        Source document; its metadata is copied into every chunk.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of characters shared by consecutive chunks.

    Returns
    -------
    list[Document]
        Chunks carrying ``chunk_index``, ``start_index``, ``end_index``
        and ``source`` metadata.
    """
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
        separators=OVERLAP_SEPARATORS if chunk_overlap > 0 else SEPARATORS,
        add_start_index=True,
        strip_whitespace=False,
    )
    chunks = splitter.split_documents([document])
    source = document.metadata.get("source", "unknown")
    for index, chunk in enumerate(chunks):
        start = chunk.metadata["start_index"]
        chunk.metadata["chunk_index"] = index
        chunk.metadata["end_index"] = start + len(chunk.page_content)
        chunk.metadata["source"] = source
    return chunks


def chunk_id(source: str, index: int) -> str:
    """Deterministic record id; stable as long as the chunking parameters are."""
    return f"{source}_{index}"
