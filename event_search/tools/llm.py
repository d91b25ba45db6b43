"""
Utilities for interacting with a chat model via LangChain.

This module lazily constructs chat model instances based on environment
variables and the caller-supplied provider and model name.  The ``google``
provider (the default) instantiates ``ChatGoogleGenerativeAI``; the ``openai``
provider instantiates ``ChatOpenAI``.  Instances are cached per configuration
so repeated agent runs reuse the same client.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Dict, Tuple

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from ..errors import ConfigurationError
from ..settings import Settings, load_settings
from .agent_config import AgentSettings

logger = logging.getLogger("event_search.llm")

DEFAULT_MODELS = {
    "google": "gemini-2.5-pro-preview-05-06",
    "openai": "gpt-4o-mini",
}

# Cache multiple LLM instances keyed by provider/model/sampling settings
_cached_llms: Dict[Tuple[str, str, float, int], Any] = {}


def get_llm(
    model_name: Optional[str] = None,
    *,
    provider: Optional[str] = None,
    temperature: float = 0.7,
    max_output_tokens: int = 2048,
    settings: Optional[Settings] = None,
) -> Any:
    """Return a lazily constructed chat model instance.

    Args:
        model_name: Model to initialise.  Defaults to the provider's entry in
            ``DEFAULT_MODELS``.
        provider: ``"google"`` or ``"openai"``.  Defaults to ``LLM_PROVIDER``.
        temperature: Sampling temperature.
        max_output_tokens: Upper bound on generated tokens.
        settings: Settings to read API keys from; the environment by default.

    Returns:
        A LangChain chat model, or ``None`` if the provider's API key is not
        configured.
    """
    settings = settings or load_settings()
    provider = (provider or settings.llm_provider).lower()
    if provider not in DEFAULT_MODELS:
        raise ConfigurationError(f"Unknown LLM provider: {provider}")
    model = model_name or DEFAULT_MODELS[provider]

    key = (provider, model, temperature, max_output_tokens)
    if key in _cached_llms:
        return _cached_llms[key]

    if provider == "google":
        if not settings.google_api_key:
            logger.warning("GOOGLE_API_KEY is not set.  Language model features will be disabled.")
            return None
        logger.info(f"Initialising Google Generative AI model (model={model})")
        llm = ChatGoogleGenerativeAI(
            model=model,
            google_api_key=settings.google_api_key,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
    else:
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not set.  Language model features will be disabled.")
            return None
        logger.info(f"Initialising OpenAI model (model={model})")
        llm = ChatOpenAI(
            model=model,
            api_key=settings.openai_api_key,
            temperature=temperature,
            max_tokens=max_output_tokens,
        )

    _cached_llms[key] = llm
    return llm


def get_agent_llm(agent: AgentSettings, settings: Optional[Settings] = None) -> Any:
    """Return the chat model configured for an agent in the YAML settings."""
    return get_llm(
        agent.model_name,
        provider=agent.provider,
        temperature=agent.temperature,
        max_output_tokens=agent.max_output_tokens,
        settings=settings,
    )


def message_text(content: Any) -> str:
    """Return the plain text of a chat message's ``content``.

    Providers return either a string or a list of content parts; only string
    items and ``{"type": "text", "text": ...}`` parts contribute text.
    """
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return ""
    parts = []
    for item in content:
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, dict) and item.get("type") == "text" and isinstance(item.get("text"), str):
            parts.append(item["text"])
    return "".join(parts)
