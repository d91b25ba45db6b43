# Event search: query construction and traced Google Custom Search calls.

from .query import build_query
from .google_cse import fetch_raw_search_results, search_events
from .tools import create_search_tool, get_search_tool
from .types import CityWithRadius, SearchInputParameters

__all__ = [
    "build_query",
    "fetch_raw_search_results",
    "search_events",
    "create_search_tool",
    "get_search_tool",
    "CityWithRadius",
    "SearchInputParameters",
]
