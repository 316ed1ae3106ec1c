"""Prompt template for grounded question answering."""

from __future__ import annotations

from langchain_core.prompts import PromptTemplate

FALLBACK_ANSWER = "I don't know, thanks for asking!"

RAG_TEMPLATE = f"""\
Use the following pieces of context to answer the question.
Use three sentences maximum and keep the answer as concise as possible.
If you don't know the answer, just say "{FALLBACK_ANSWER}" and don't try to make up an answer.

{{context}}

Question: {{question}}

Answer:"""

RAG_PROMPT = PromptTemplate.from_template(RAG_TEMPLATE)


def build_rag_prompt(question: str, context: str) -> str:
    """Render the prompt text exactly as the model receives it."""
    return RAG_PROMPT.format(context=context, question=question)
