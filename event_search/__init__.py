"""Event search agent: an LLM chained to Google Custom Search, traced with Langfuse."""

from .errors import (
    AgentError,
    ConfigurationError,
    ContractViolationError,
    EventSearchError,
    InvalidArgumentError,
    UpstreamInvocationError,
)
from .search import build_query, fetch_raw_search_results, search_events

__all__ = [
    "build_query",
    "fetch_raw_search_results",
    "search_events",
    "AgentError",
    "ConfigurationError",
    "ContractViolationError",
    "EventSearchError",
    "InvalidArgumentError",
    "UpstreamInvocationError",
]
