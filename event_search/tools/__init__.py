# Shared infrastructure for the event search agent.
#
# These modules wrap the third-party SDKs the agent depends on: Langfuse for
# tracing, LangChain chat models for the LLM, and the YAML file that holds
# per-agent model settings.  Keeping them here leaves the search and agent
# packages free of client construction details.

from .agent_config import AgentSettings, get_agent_settings, load_agent_config
from .langfuse_tracing import (
    NullSpan,
    create_langfuse,
    end_trace,
    open_generation,
    open_span,
    start_trace,
)
from .llm import get_agent_llm, get_llm, message_text

__all__ = [
    "AgentSettings",
    "get_agent_settings",
    "load_agent_config",
    "NullSpan",
    "create_langfuse",
    "end_trace",
    "open_generation",
    "open_span",
    "start_trace",
    "get_agent_llm",
    "get_llm",
    "message_text",
]
