"""Unit tests for prompts, generation strategies, and the query pipeline.

All tests run without OpenAI by injecting ``FakeListChatModel`` or mocks.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from langchain_core.documents import Document
from langchain_core.language_models import FakeListChatModel
from langchain_openai import ChatOpenAI

from pdf_rag.config import Settings
from pdf_rag.generation.llm import get_llm
from pdf_rag.generation.prompts import FALLBACK_ANSWER, RAG_PROMPT, build_rag_prompt
from pdf_rag.generation.query import answer_question
from pdf_rag.generation.strategies import (
    GenerationStrategy,
    RetrieverChainStrategy,
    StuffedContextStrategy,
    get_generation_strategy,
)
from pdf_rag.results import QueryStatus
from pdf_rag.retrieval.models import Citation, RetrievalResult


def _docs(*texts: str) -> list[Document]:
    return [Document(page_content=t, metadata={"source": "s.pdf", "chunk_index": i}) for i, t in enumerate(texts)]


def _results(*texts: str) -> list[RetrievalResult]:
    return [
        RetrievalResult(content=t, citation=Citation(source="s.pdf", chunk_index=i, score=0.9 - i * 0.1))
        for i, t in enumerate(texts)
    ]


# ═══════════════════════════════════════════════════════════════════════
# Prompt
# ═══════════════════════════════════════════════════════════════════════


class TestPrompt:
    def test_variables(self) -> None:
        assert set(RAG_PROMPT.input_variables) == {"context", "question"}

    def test_rendered_prompt_contract(self) -> None:
        text = build_rag_prompt("What is Pinecone?", "Pinecone is a vector database.")
        assert text.startswith("Use the following pieces of context to answer the question.")
        assert "Use three sentences maximum" in text
        assert f'just say "{FALLBACK_ANSWER}"' in text
        assert "\n\nPinecone is a vector database.\n\nQuestion: What is Pinecone?\n\nAnswer:" in text
        assert text.endswith("Answer:")

    def test_fallback_phrase(self) -> None:
        assert FALLBACK_ANSWER == "I don't know, thanks for asking!"


# ═══════════════════════════════════════════════════════════════════════
# Strategies
# ═══════════════════════════════════════════════════════════════════════


class TestStuffedContextStrategy:
    def test_context_joined_with_newlines_in_order(self) -> None:
        strategy = StuffedContextStrategy(FakeListChatModel(responses=["x"]))
        assert strategy.build_context(_docs("b first", "a second")) == "b first\na second"

    def test_returns_model_text_verbatim(self) -> None:
        strategy = StuffedContextStrategy(FakeListChatModel(responses=["  Exactly this.  "]))
        assert strategy.generate("q", _docs("ctx")) == "  Exactly this.  "

    def test_prompt_receives_context_and_question(self) -> None:
        strategy = StuffedContextStrategy(FakeListChatModel(responses=["ok"]))
        captured: list[str] = []
        # Tap the rendered prompt on its way to the model.
        strategy.prompt = RAG_PROMPT | (lambda value: captured.append(value.to_string()) or value)

        assert strategy.generate("Who?", _docs("one", "two")) == "ok"
        assert captured == [build_rag_prompt("Who?", "one\ntwo")]


class TestRetrieverChainStrategy:
    def test_documents_joined_with_newlines(self) -> None:
        strategy = RetrieverChainStrategy(FakeListChatModel(responses=["x"]))
        formatted = strategy._format_documents({"context": _docs("one", "two"), "question": "q"})
        assert formatted == "one\ntwo"

    def test_rendered_prompt_matches_stuffed_strategy(self) -> None:
        strategy = RetrieverChainStrategy(FakeListChatModel(responses=["ok"]))
        captured: list[str] = []
        strategy.prompt = RAG_PROMPT | (lambda value: captured.append(value.to_string()) or value)

        assert strategy.generate("Who?", _docs("one", "two")) == "ok"
        assert captured == [build_rag_prompt("Who?", "one\ntwo")]

    def test_returns_model_text(self) -> None:
        strategy = RetrieverChainStrategy(FakeListChatModel(responses=["Chained answer."]))
        assert strategy.generate("q", _docs("ctx")) == "Chained answer."


class TestStrategyRegistry:
    @pytest.mark.parametrize(
        ("name", "cls"),
        [("stuffed", StuffedContextStrategy), ("retriever_chain", RetrieverChainStrategy)],
    )
    def test_lookup(self, name: str, cls: type) -> None:
        strategy = get_generation_strategy(name, FakeListChatModel(responses=["x"]))
        assert isinstance(strategy, cls)
        assert strategy.name == name

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown generation strategy"):
            get_generation_strategy("map_reduce", FakeListChatModel(responses=["x"]))


# ═══════════════════════════════════════════════════════════════════════
# Query pipeline
# ═══════════════════════════════════════════════════════════════════════


class TestAnswerQuestion:
    def test_zero_matches_skip_generation(self) -> None:
        retriever = MagicMock()
        retriever.search.return_value = []
        generator = MagicMock(spec=GenerationStrategy)

        result = answer_question(retriever, generator, "What is this document about?", k=10)

        assert result.status is QueryStatus.NO_MATCHES
        assert result.answer is None
        assert result.ok
        generator.generate.assert_not_called()

    def test_answered_with_sources(self) -> None:
        retriever = MagicMock()
        retriever.search.return_value = _results("alpha", "beta")
        generator = MagicMock(spec=GenerationStrategy)
        generator.generate.return_value = "It is about alpha."

        result = answer_question(retriever, generator, "q", k=4)

        retriever.search.assert_called_once_with("q", k=4)
        question, documents = generator.generate.call_args.args
        assert question == "q"
        assert [d.page_content for d in documents] == ["alpha", "beta"]
        assert result.status is QueryStatus.ANSWERED
        assert result.answer == "It is about alpha."
        assert result.sources == ["[s.pdf§0]", "[s.pdf§1]"]

    def test_retrieval_failure(self) -> None:
        retriever = MagicMock()
        retriever.search.side_effect = ConnectionError("index not found")
        generator = MagicMock(spec=GenerationStrategy)

        result = answer_question(retriever, generator, "q")

        assert result.status is QueryStatus.FAILED
        assert result.stage == "retrieval"
        assert result.error == "index not found"
        assert result.answer is None
        generator.generate.assert_not_called()

    def test_generation_failure(self) -> None:
        retriever = MagicMock()
        retriever.search.return_value = _results("alpha")
        generator = MagicMock(spec=GenerationStrategy)
        generator.generate.side_effect = TimeoutError()

        result = answer_question(retriever, generator, "q")

        assert result.status is QueryStatus.FAILED
        assert result.stage == "generation"
        assert result.error == "TimeoutError"
        assert result.sources == ["[s.pdf§0]"]


# ═══════════════════════════════════════════════════════════════════════
# LLM factory
# ═══════════════════════════════════════════════════════════════════════


class TestGetLLM:
    def test_defaults_to_openai_cloud(self) -> None:
        llm = get_llm(Settings(_env_file=None, openai_api_key="sk-test"))
        assert isinstance(llm, ChatOpenAI)
        assert llm.model_name == "gpt-3.5-turbo-0125"
        assert llm.temperature == 0.0
        assert not llm.openai_api_base

    def test_custom_base_url(self) -> None:
        llm = get_llm(Settings(_env_file=None, llm_base_url="http://localhost:8001/v1"))
        assert llm.openai_api_base == "http://localhost:8001/v1"
        assert llm.openai_api_key.get_secret_value() == "EMPTY"
