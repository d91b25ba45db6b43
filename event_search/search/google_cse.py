"""
Traced Google Custom Search calls.

``fetch_raw_search_results`` wraps a single search tool invocation.  When a
Langfuse trace is supplied, the call is recorded as a
``google-custom-search-invoke`` span which is updated and ended on every exit
path; without one, a :class:`NullSpan` keeps the code path identical.

Failures are never swallowed: the span records them and the error is raised
to the caller.
"""

from __future__ import annotations

import json
import logging
import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from ..errors import ContractViolationError, InvalidArgumentError, UpstreamInvocationError
from ..tools.langfuse_tracing import open_span
from .query import build_query
from .tools import get_search_tool
from .types import SearchInputParameters

logger = logging.getLogger("event_search.google_cse")

SPAN_NAME = "google-custom-search-invoke"
SPAN_METADATA = {
    "tool": "GoogleCustomSearch",
    "service": "Google Custom Search Engine",
}


class SearchTool(Protocol):
    def invoke(self, input: Any, *args: Any, **kwargs: Any) -> Any: ...


@dataclass(frozen=True)
class StructuredFailure:
    """An ordinary exception that carries its own message."""

    error: Exception

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__

    @property
    def trace(self) -> str:
        return "".join(traceback.format_exception(type(self.error), self.error, self.error.__traceback__))


@dataclass(frozen=True)
class OpaqueFailure:
    """An exception whose only payload is a plain mapping, not a message."""

    error: Exception
    value: Any


Failure = Union[StructuredFailure, OpaqueFailure]


def classify_failure(error: Exception) -> Failure:
    # Exceptions wrapping other exceptions or scalars (KeyError(0)) stay structured.
    if len(error.args) == 1 and isinstance(error.args[0], Mapping):
        return OpaqueFailure(error=error, value=error.args[0])
    return StructuredFailure(error=error)


_JSON_TYPE_NAMES = (
    (bool, "boolean"),
    (int, "number"),
    (float, "number"),
    (Mapping, "object"),
    (list, "array"),
    (tuple, "array"),
)


def _type_name(value: Any) -> str:
    """Name the JSON kind of ``value``, or its Python type for anything else."""
    if value is None:
        return "null"
    for kind, name in _JSON_TYPE_NAMES:
        if isinstance(value, kind):
            return name
    return type(value).__name__


def _payload(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        # Non-string keys or circular references.
        return repr(value)


def _unexpected_type_message(value: Any) -> str:
    payload = _payload(value)
    return (
        f"GoogleCustomSearch tool returned an unexpected type: {_type_name(value)}. "
        f"Expected string. Output: {payload}"
    )


def fetch_raw_search_results(
    query: str,
    parent_trace: Optional[Any] = None,
    *,
    search_tool: Optional[SearchTool] = None,
) -> str:
    """Run ``query`` through the search tool and return its raw text output.

    Args:
        query: The search engine query, usually from :func:`build_query`.
        parent_trace: Optional Langfuse trace or span to record the call under.
        search_tool: Object with ``invoke(query)``.  Defaults to the Google
            Custom Search tool configured from the environment.

    Returns:
        The string returned by the tool.

    Raises:
        ContractViolationError: if the tool returned a non-string value.
        UpstreamInvocationError: if the tool failed with a mapping payload.
        Exception: any other tool failure, re-raised unchanged.
    """
    if search_tool is None:
        search_tool = get_search_tool()

    span = open_span(
        parent_trace,
        name=SPAN_NAME,
        input={"query": query},
        metadata=SPAN_METADATA,
    )

    try:
        results = search_tool.invoke(query)
    except Exception as e:
        logger.exception("Error during Google Custom Search invoke")
        failure = classify_failure(e)
        if isinstance(failure, StructuredFailure):
            span.update(
                level="ERROR",
                status_message=failure.message,
                output={"error": failure.trace},
            )
            span.end()
            raise
        span.update(
            level="ERROR",
            status_message="Invoke failed",
            output={"error": str(failure.value)},
        )
        span.end()
        raise UpstreamInvocationError(str(failure.value)) from e

    if not isinstance(results, str):
        message = _unexpected_type_message(results)
        logger.error(message)
        span.update(
            level="ERROR",
            status_message="Unexpected output type from tool",
            output={"error": message, "data": results},
        )
        span.end()
        raise ContractViolationError(message)

    span.update(output=results)
    span.end()
    return results


def search_events(
    params: SearchInputParameters,
    parent_trace: Optional[Any] = None,
    *,
    search_tool: Optional[SearchTool] = None,
) -> Dict[str, str]:
    """Search events for ``params.field_of_interest`` in every location.

    Returns a mapping of city name to raw search results, in location order.
    """
    if not params.locations:
        raise InvalidArgumentError("At least one location is required.")

    # Validate every query before the first external call.
    queries = [(loc.city_name, build_query(params.field_of_interest, loc.city_name)) for loc in params.locations]

    results: Dict[str, str] = {}
    for city_name, query in queries:
        logger.info(f"Searching events: {query}")
        results[city_name] = fetch_raw_search_results(query, parent_trace, search_tool=search_tool)
    return results
