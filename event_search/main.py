"""
FastAPI server exposing the event search agent over HTTP.

Endpoints:
- ``GET /events`` builds an events query from a field of interest and a city
  and returns the raw Google Custom Search results.
- ``POST /events`` does the same for several locations at once.
- ``GET /chat`` runs the tool-calling agent on a free-form message.

Every request is recorded as a Langfuse trace when the LANGFUSE_* variables are
set.  Start the server with ``uvicorn event_search.main:app --reload``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .agents import run_agent
from .errors import ConfigurationError, EventSearchError, InvalidArgumentError
from .search import SearchInputParameters, build_query, fetch_raw_search_results, get_search_tool, search_events
from .settings import load_settings
from .tools.agent_config import get_agent_settings
from .tools.langfuse_tracing import create_langfuse, end_trace, start_trace
from .tools.llm import get_agent_llm, message_text


settings = load_settings()

# Configure a simple application-wide logger.  The log level comes from the
# LOG_LEVEL environment variable (default: INFO).
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger("event_search.main")

langfuse_client = create_langfuse(settings)

app = FastAPI(title="Event Search Agent")


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(EventSearchError)
async def event_search_error_handler(request: Request, exc: EventSearchError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": str(exc)})


def _run_traced(name: str, input: Dict[str, Any], fn: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    """Run ``fn(trace)`` inside a Langfuse trace and end the trace either way."""
    trace = start_trace(langfuse_client, name=name, input=input, metadata={"endpoint": name})
    try:
        out = fn(trace)
    except EventSearchError as e:
        end_trace(langfuse_client, trace, error=str(e))
        raise
    except Exception as e:
        logger.exception(f"Upstream failure while handling {name}")
        end_trace(langfuse_client, trace, error=str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e
    end_trace(langfuse_client, trace, output=out)
    return out


@app.get("/")
def root() -> Dict[str, str]:
    """Return a brief description of the API."""
    return {
        "message": "Event search agent is running. Use /events?field=...&city=... or /chat?message=...",
    }


@app.get("/events")
def get_events(field: str = "", city: str = "") -> Dict[str, Any]:
    """Search events for one field of interest in one city."""
    query = build_query(field, city)
    logger.info(f"Received events request: {query}")

    def search(trace: Any) -> Dict[str, Any]:
        results = fetch_raw_search_results(query, trace, search_tool=get_search_tool())
        return {"query": query, "results": results}

    return _run_traced("/events", {"field": field, "city": city}, search)


@app.post("/events")
def post_events(params: SearchInputParameters) -> Dict[str, Any]:
    """Search events for one field of interest across several locations."""
    logger.info(f"Received multi-location events request: {params.field_of_interest}")

    def search(trace: Any) -> Dict[str, Any]:
        return {"results": search_events(params, trace, search_tool=get_search_tool())}

    return _run_traced("/events", params.model_dump(), search)


@app.get("/chat")
def chat(message: str) -> Dict[str, Any]:
    """Run the search agent on ``message`` and return its final answer."""
    if not message:
        raise InvalidArgumentError("Message cannot be empty.")
    agent_settings = get_agent_settings("search_agent")
    llm = get_agent_llm(agent_settings)
    if llm is None:
        raise ConfigurationError("No language model configured.  Set the appropriate environment variables.")
    search_tool = get_search_tool()
    logger.info(f"Received chat request: {message}")

    def answer(trace: Any) -> Dict[str, Any]:
        final = run_agent(
            message,
            llm=llm,
            search_tool=search_tool,
            trace=trace,
            system_prompt=agent_settings.system_prompt,
            max_tool_rounds=agent_settings.max_tool_rounds,
        )
        text = final.content if isinstance(final.content, str) else message_text(final.content)
        return {"answer": text or json.dumps(final.content)}

    return _run_traced("/chat", {"message": message}, answer)
