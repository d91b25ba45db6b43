"""
Command-line demo for the event search agent.

  event-search chat ["prompt"]          ask the model, letting it call Google search
  event-search events FIELD CITY...     print raw event search results per city

Configuration comes from the environment (or a ``.env`` file); see
``event_search.settings``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .agents import get_agent_graph, initial_state
from .errors import ConfigurationError, EventSearchError
from .search import CityWithRadius, SearchInputParameters, create_search_tool, search_events
from .settings import Settings, load_settings
from .tools.agent_config import get_agent_settings
from .tools.langfuse_tracing import create_langfuse, end_trace, start_trace
from .tools.llm import get_agent_llm, message_text

logger = logging.getLogger("event_search.cli")

DEFAULT_PROMPT = (
    "Do you have the tool GoogleCustomSearch enabled? "
    'Demonstrate it performing a search for "latest trends in renewable energy".'
)


def _format_content(content: Any) -> str:
    if isinstance(content, str):
        return content
    return json.dumps(content, indent=2)


def run_chat(args: argparse.Namespace, settings: Settings, trace: Optional[Any]) -> Dict[str, Any]:
    agent_settings = get_agent_settings("search_agent")
    llm = get_agent_llm(agent_settings, settings)
    if llm is None:
        raise ConfigurationError("No language model configured.  Set the appropriate environment variables.")
    search_tool = create_search_tool(settings)
    graph = get_agent_graph(llm, search_tool, max_tool_rounds=agent_settings.max_tool_rounds)

    final = None
    for update in graph.stream(
        initial_state(args.prompt, agent_settings.system_prompt),
        config={"configurable": {"trace": trace}},
        stream_mode="updates",
    ):
        values = update.get("model")
        if not values:
            continue
        message = values["messages"][-1]
        if final is None:
            # First model turn: show what it said before any tool ran.
            text = message_text(message.content)
            if text:
                print(text)
            if message.tool_calls:
                print("\nTool calls detected. Executing tools...")
        final = message

    print("\nFinal AI Response (after processing tools):")
    print(_format_content(final.content))
    return {"answer": final.content}


def run_events(args: argparse.Namespace, settings: Settings, trace: Optional[Any]) -> Dict[str, Any]:
    params = SearchInputParameters(
        field_of_interest=args.field,
        locations=[CityWithRadius(city_name=city) for city in args.cities],
    )
    results = search_events(params, trace, search_tool=create_search_tool(settings))
    for city, raw in results.items():
        print(f"\n== {city}")
        print(raw)
    return {"results": results}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="event-search", description=__doc__.strip().splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    chat = sub.add_parser("chat", help="ask the model; it may call Google Custom Search")
    chat.add_argument("prompt", nargs="?", default=DEFAULT_PROMPT)
    chat.set_defaults(handler=run_chat)

    events = sub.add_parser("events", help="search events for a field of interest in cities")
    events.add_argument("field", help="field of interest, e.g. 'AI conferences'")
    events.add_argument("cities", nargs="+", help="one or more city names")
    events.set_defaults(handler=run_events)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    client = create_langfuse(settings)
    trace_input = {k: v for k, v in vars(args).items() if k != "handler"}
    trace = start_trace(client, name=f"cli:{args.command}", input=trace_input)
    try:
        output = args.handler(args, settings, trace)
    except EventSearchError as e:
        logger.error(f"{e} Aborting.")
        end_trace(client, trace, error=str(e))
        return 1
    except Exception as e:
        logger.exception("Unexpected error. Aborting.")
        end_trace(client, trace, error=str(e))
        return 1
    end_trace(client, trace, output=output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
