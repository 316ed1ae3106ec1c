"""Pluggable answer-generation strategies.

Both strategies answer from retrieved chunks with the same prompt; they
differ only in how the context reaches the prompt:

- :class:`StuffedContextStrategy` joins the chunk texts into one string
  up front and formats the prompt with it.
- :class:`RetrieverChainStrategy` hands the documents to a
  stuff-documents runnable chain, which formats them itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import RunnablePassthrough

from pdf_rag.generation.prompts import RAG_PROMPT

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.language_models import BaseChatModel
    from langchain_core.prompts import BasePromptTemplate


class GenerationStrategy(ABC):
    """Turn a question plus retrieved documents into answer text."""

    name: str = "base"

    def __init__(self, llm: BaseChatModel, prompt: BasePromptTemplate = RAG_PROMPT) -> None:
        self.llm = llm
        self.prompt = prompt

    @abstractmethod
    def generate(self, question: str, documents: list[Document]) -> str:
        """Return the model's answer verbatim."""
        ...


class StuffedContextStrategy(GenerationStrategy):
    name = "stuffed"

    def __init__(
        self,
        llm: BaseChatModel,
        prompt: BasePromptTemplate = RAG_PROMPT,
        separator: str = "\n",
    ) -> None:
        super().__init__(llm, prompt)
        self.separator = separator

    def build_context(self, documents: list[Document]) -> str:
        return self.separator.join(doc.page_content for doc in documents)

    def generate(self, question: str, documents: list[Document]) -> str:
        chain = self.prompt | self.llm | StrOutputParser()
        return chain.invoke({"context": self.build_context(documents), "question": question})


class RetrieverChainStrategy(GenerationStrategy):
    name = "retriever_chain"

    document_separator = "\n"

    def _format_documents(self, inputs: dict) -> str:
        return self.document_separator.join(doc.page_content for doc in inputs["context"])

    def generate(self, question: str, documents: list[Document]) -> str:
        chain = (
            RunnablePassthrough.assign(context=self._format_documents)
            | self.prompt
            | self.llm
            | StrOutputParser()
        )
        return chain.invoke({"context": documents, "question": question})


_STRATEGIES: dict[str, type[GenerationStrategy]] = {
    StuffedContextStrategy.name: StuffedContextStrategy,
    RetrieverChainStrategy.name: RetrieverChainStrategy,
}


def get_generation_strategy(name: str, llm: BaseChatModel) -> GenerationStrategy:
    """Instantiate the strategy registered under *name*."""
    try:
        cls = _STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown generation strategy {name!r}; choose from {sorted(_STRATEGIES)}"
        ) from None
    return cls(llm)
