"""
Google Custom Search tool.

The tool is a LangChain ``GoogleSearchRun`` over ``GoogleSearchAPIWrapper``,
so it can be bound to a chat model and invoked directly with a query string.
Credentials come from ``GOOGLE_API_KEY`` and ``GOOGLE_CSE_ID``; both are
required and their absence is fatal.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from langchain_google_community import GoogleSearchAPIWrapper, GoogleSearchRun

from ..errors import ConfigurationError
from ..settings import Settings, load_settings

logger = logging.getLogger("event_search.search_tool")

DEFAULT_RESULT_COUNT = 10


def create_search_tool(settings: Settings, *, k: int = DEFAULT_RESULT_COUNT) -> GoogleSearchRun:
    if not settings.google_api_key or not settings.google_cse_id:
        raise ConfigurationError("GOOGLE_API_KEY or GOOGLE_CSE_ID is not set. Aborting.")
    wrapper = GoogleSearchAPIWrapper(
        google_api_key=settings.google_api_key,
        google_cse_id=settings.google_cse_id,
        k=k,
    )
    logger.info(f"Google Custom Search tool ready (k={k})")
    return GoogleSearchRun(api_wrapper=wrapper)


@lru_cache(maxsize=1)
def _default_search_tool() -> GoogleSearchRun:
    return create_search_tool(load_settings())


def get_search_tool(settings: Optional[Settings] = None) -> GoogleSearchRun:
    """Return the search tool for ``settings``, or the cached default one."""
    if settings is not None:
        return create_search_tool(settings)
    return _default_search_tool()
