"""Langfuse tracing helpers.

Goal
- Make search tool calls and LLM generations observable in Langfuse.
- Keep instrumentation optional: without the LANGFUSE_* env vars no client is
  created and every helper in this module degrades to a no-op.

The client is created explicitly with :func:`create_langfuse` by the entry
points (CLI command, FastAPI app) and the resulting trace is handed down to
the code that opens spans.  Nothing here keeps a process-wide "current trace".
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from langfuse import Langfuse

from ..settings import Settings

logger = logging.getLogger("event_search.langfuse")


class NullSpan:
    """Stand-in for a Langfuse span when tracing is off."""

    def update(self, **kwargs: Any) -> None:
        return None

    def end(self, **kwargs: Any) -> None:
        return None


def create_langfuse(settings: Settings) -> Optional[Langfuse]:
    """Return a Langfuse client if configured, else None."""
    if not settings.langfuse_enabled:
        logger.warning(
            "Langfuse environment variables (LANGFUSE_SECRET_KEY, LANGFUSE_PUBLIC_KEY, LANGFUSE_HOST) "
            "are not fully set. Langfuse tracing will be disabled."
        )
        return None

    try:
        client = Langfuse(
            public_key=settings.langfuse_public_key,
            secret_key=settings.langfuse_secret_key,
            host=settings.langfuse_host,
        )
    except Exception:
        logger.exception("Failed to initialise Langfuse; tracing will be disabled.")
        return None
    logger.info("Langfuse initialised successfully.")
    return client


def start_trace(
    client: Optional[Langfuse],
    *,
    name: str,
    user_id: Optional[str] = None,
    session_id: Optional[str] = None,
    input: Optional[Any] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> Optional[Any]:
    """Start a Langfuse trace, or return None when tracing is off."""
    if client is None:
        return None
    return client.trace(
        name=name,
        user_id=user_id,
        session_id=session_id,
        input=input,
        metadata=metadata,
    )


def open_span(
    parent: Optional[Any],
    *,
    name: str,
    input: Optional[Any] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> Any:
    """Open a span under ``parent`` (a trace or span), or a :class:`NullSpan`."""
    if parent is None:
        return NullSpan()
    return parent.span(name=name, input=input, metadata=metadata)


def end_trace(
    client: Optional[Langfuse],
    trace: Optional[Any],
    *,
    output: Optional[Any] = None,
    error: Optional[str] = None,
) -> None:
    if trace is None:
        return
    # Traces have no level/status in SDK v2; record errors as output.
    if error:
        trace.update(output={"error": error}, tags=["error"])
    elif output is not None:
        trace.update(output=output)

    # Best-effort flush so traces appear quickly in the UI.
    if client is not None:
        try:
            client.flush()
        except Exception:
            logger.exception("Failed to flush Langfuse client")


def open_generation(
    parent: Optional[Any],
    *,
    name: str,
    model: Optional[str] = None,
    input: Optional[Any] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> Any:
    """Open an LLM generation under ``parent``, or a :class:`NullSpan`."""
    if parent is None:
        return NullSpan()
    return parent.generation(name=name, model=model, input=input, metadata=metadata)
