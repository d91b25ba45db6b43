from __future__ import annotations

import logging
from typing import Any, Optional

from langchain_core.messages import AIMessage, AnyMessage, ToolMessage
from langchain_core.runnables import RunnableConfig

from ..errors import AgentError
from ..search.google_cse import fetch_raw_search_results
from ..tools.langfuse_tracing import open_generation
from ..tools.llm import message_text

from .types import AgentState

logger = logging.getLogger("event_search.agent")


def trace_from_config(config: Optional[RunnableConfig]) -> Optional[Any]:
    """Return the Langfuse trace passed in ``config["configurable"]["trace"]``."""
    if not config:
        return None
    return (config.get("configurable") or {}).get("trace")


def _message_log(messages: list[AnyMessage]) -> list[dict[str, Any]]:
    return [{"role": m.type, "content": m.content} for m in messages]


def make_model_node(llm: Any, search_tool: Any):
    """Build the node that calls the chat model with the search tool bound."""
    bound = llm.bind_tools([search_tool])
    model_label = getattr(llm, "model", None) or getattr(llm, "model_name", None)

    def model_node(state: AgentState, config: RunnableConfig) -> AgentState:
        messages = state.get("messages", [])
        generation = open_generation(
            trace_from_config(config),
            name="chat-model-invoke",
            model=model_label,
            input=_message_log(messages),
            metadata={"kind": "llm", "tool_rounds": state.get("tool_rounds", 0)},
        )
        logger.info(f"LLM request (model={model_label}, messages={len(messages)})")
        try:
            response = bound.invoke(messages)
        except Exception as e:
            logger.exception("Error during LLM request")
            generation.end(level="ERROR", status_message=str(e))
            raise
        tool_calls = getattr(response, "tool_calls", None) or []
        logger.info(f"LLM response: {message_text(response.content)!r} (tool_calls={len(tool_calls)})")
        generation.end(output={"content": response.content, "tool_calls": tool_calls})
        return {"messages": [response]}

    return model_node


def make_tools_node(search_tool: Any):
    """Build the node that executes the search tool calls of the last AI message."""

    def tools_node(state: AgentState, config: RunnableConfig) -> AgentState:
        trace = trace_from_config(config)
        last = state["messages"][-1]
        tool_calls = last.tool_calls if isinstance(last, AIMessage) else []

        replies: list[ToolMessage] = []
        for call in tool_calls:
            name = call.get("name")
            call_id = call.get("id")
            if not call_id or not isinstance(call_id, str):
                raise AgentError(f"Missing/invalid id for {name}.")

            if name != search_tool.name:
                logger.warning(f"Model requested unknown tool {name!r}")
                replies.append(ToolMessage(content=f"Unknown tool: {name}", tool_call_id=call_id, status="error"))
                continue

            args = call.get("args") or {}
            query = args.get("query", args.get("input"))
            if not isinstance(query, str):
                logger.warning(f"Tool call {call_id} for {name} has no string query: {args!r}")
                replies.append(
                    ToolMessage(content=f"Missing query argument for {name}.", tool_call_id=call_id, status="error")
                )
                continue

            logger.info(f"Executing {name} for query: {query}")
            output = fetch_raw_search_results(query, trace, search_tool=search_tool)
            replies.append(ToolMessage(content=output, tool_call_id=call_id, name=name))

        return {"messages": replies, "tool_rounds": state.get("tool_rounds", 0) + 1}

    return tools_node
