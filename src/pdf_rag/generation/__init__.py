"""
Generation: chat model, prompt, and the query pipeline.

Public API
----------
- :func:`answer_question`: retrieve, then generate a grounded answer.
- :class:`GenerationStrategy`: pluggable prompt-assembly strategy.
- :func:`get_generation_strategy`: look up a strategy by name.
- :func:`get_llm`: configured ``ChatOpenAI`` instance.
"""

from pdf_rag.generation.llm import get_llm
from pdf_rag.generation.prompts import FALLBACK_ANSWER, RAG_PROMPT, build_rag_prompt
from pdf_rag.generation.query import answer_question
from pdf_rag.generation.strategies import (
    GenerationStrategy,
    RetrieverChainStrategy,
    StuffedContextStrategy,
    get_generation_strategy,
)

__all__ = [
    "FALLBACK_ANSWER",
    "GenerationStrategy",
    "RAG_PROMPT",
    "RetrieverChainStrategy",
    "StuffedContextStrategy",
    "answer_question",
    "build_rag_prompt",
    "get_generation_strategy",
    "get_llm",
]
