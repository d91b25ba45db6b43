"""
Pytest configuration and fixtures.
Test doubles for the Langfuse trace, the search tool and the chat model.
"""

from __future__ import annotations

from typing import Any, Iterable, List
from unittest.mock import Mock

import pytest
from langchain_core.messages import AIMessage

from event_search.tools.agent_config import load_agent_config


LANGFUSE_ENV = ("LANGFUSE_PUBLIC_KEY", "LANGFUSE_SECRET_KEY", "LANGFUSE_HOST")
GOOGLE_ENV = ("GOOGLE_API_KEY", "GOOGLE_CSE_ID", "OPENAI_API_KEY", "LLM_PROVIDER")
OTHER_ENV = ("LOG_LEVEL", "AGENT_CONFIG_PATH")


class FakeSearchTool:
    """Search tool double that records queries and replays a result or error."""

    name = "google_search"

    def __init__(self, result: Any = "search results", error: BaseException | None = None):
        self.result = result
        self.error = error
        self.queries: List[str] = []

    def invoke(self, query: Any, *args: Any, **kwargs: Any) -> Any:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


class FakeChatModel:
    """Chat model double returning scripted responses in order."""

    model = "fake-model"

    def __init__(self, responses: Iterable[AIMessage]):
        self.responses = list(responses)
        self.bound_tools: List[Any] = []
        self.calls: List[list] = []

    def bind_tools(self, tools: List[Any]) -> "FakeChatModel":
        self.bound_tools = list(tools)
        return self

    def invoke(self, messages: list, *args: Any, **kwargs: Any) -> AIMessage:
        self.calls.append(list(messages))
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of the tests."""
    for name in LANGFUSE_ENV + GOOGLE_ENV + OTHER_ENV:
        monkeypatch.delenv(name, raising=False)
    load_agent_config.cache_clear()
    yield
    load_agent_config.cache_clear()


@pytest.fixture
def mock_span():
    span = Mock()
    span.update = Mock()
    span.end = Mock()
    return span


@pytest.fixture
def mock_trace(mock_span):
    trace = Mock()
    trace.span = Mock(return_value=mock_span)
    trace.generation = Mock(return_value=Mock())
    return trace


@pytest.fixture
def search_tool():
    return FakeSearchTool()
