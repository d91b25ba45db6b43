from __future__ import annotations

from typing import Annotated, TypedDict

from langchain_core.messages import AnyMessage
from langgraph.graph.message import add_messages


class AgentState(TypedDict, total=False):
    """Schema for the graph’s state."""

    messages: Annotated[list[AnyMessage], add_messages]
    # Number of completed tool execution rounds
    tool_rounds: int
