from __future__ import annotations

from typing import Any, Optional

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph

from ..tools.agent_config import DEFAULT_MAX_TOOL_ROUNDS
from .search_agent import make_model_node, make_tools_node
from .types import AgentState


def get_agent_graph(llm: Any, search_tool: Any, *, max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS):
    """Construct and return a compiled StateGraph for the search agent.

    The model runs first; while it asks for tools and fewer than
    ``max_tool_rounds`` rounds have run, the tool calls are executed and the
    results handed back to the model.
    """
    graph_builder: StateGraph[AgentState] = StateGraph(AgentState)

    graph_builder.add_node("model", make_model_node(llm, search_tool))
    graph_builder.add_node("tools", make_tools_node(search_tool))

    def route(state: AgentState) -> str:
        last = state["messages"][-1]
        if isinstance(last, AIMessage) and last.tool_calls and state.get("tool_rounds", 0) < max_tool_rounds:
            return "tools"
        return END

    graph_builder.add_edge(START, "model")
    graph_builder.add_conditional_edges("model", route, {"tools": "tools", END: END})
    graph_builder.add_edge("tools", "model")

    return graph_builder.compile()


def initial_state(prompt: str, system_prompt: Optional[str] = None) -> AgentState:
    messages: list = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))
    messages.append(HumanMessage(content=prompt))
    return {"messages": messages, "tool_rounds": 0}


def run_agent(
    prompt: str,
    *,
    llm: Any,
    search_tool: Any,
    trace: Optional[Any] = None,
    system_prompt: Optional[str] = None,
    max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
) -> AIMessage:
    """Run the agent on ``prompt`` and return the model's final message."""
    graph = get_agent_graph(llm, search_tool, max_tool_rounds=max_tool_rounds)
    final = graph.invoke(
        initial_state(prompt, system_prompt),
        config={"configurable": {"trace": trace}},
    )
    return final["messages"][-1]
