"""Build and expose the LangGraph tool-calling search agent.

The graph has two nodes:
- ``model`` calls the chat model with the Google Custom Search tool bound
- ``tools`` executes the search calls the model asked for, through the traced
  search invoker, and feeds the results back to ``model``
"""

from .types import AgentState
from .graph import get_agent_graph, initial_state, run_agent

__all__ = [
    "AgentState",
    "get_agent_graph",
    "initial_state",
    "run_agent",
]
