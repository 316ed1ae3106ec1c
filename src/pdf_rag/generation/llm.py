"""LLM initialisation: single place to swap providers.

Supports two modes:

1. **OpenAI cloud** (default): set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint**: set ``LLM_BASE_URL`` to any server
   exposing ``/v1/chat/completions`` (vLLM, LiteLLM, …), so
   ``ChatOpenAI`` works unchanged.
"""

from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from pdf_rag.config import Settings, settings

logger = logging.getLogger(__name__)


def get_llm(config: Settings = settings) -> ChatOpenAI:
    """Return the configured chat model.

    When ``config.llm_base_url`` is set the client is pointed at that
    endpoint instead of the OpenAI cloud API, with a dummy API key
    (``"EMPTY"``) if none is configured.
    """
    kwargs: dict = {
        "model": config.llm_model_name,
        "temperature": config.llm_temperature,
    }

    if config.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", config.llm_base_url)
        kwargs["base_url"] = config.llm_base_url
        # LangChain requires a non-empty value even when the server ignores it.
        kwargs["api_key"] = config.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = config.openai_api_key

    return ChatOpenAI(**kwargs)
