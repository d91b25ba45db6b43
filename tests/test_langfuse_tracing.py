"""Tests for the Langfuse tracing helpers."""

from __future__ import annotations

import logging
from unittest.mock import Mock

from event_search.settings import Settings
from event_search.tools import langfuse_tracing
from event_search.tools.langfuse_tracing import (
    NullSpan,
    create_langfuse,
    end_trace,
    open_generation,
    open_span,
    start_trace,
)


CONFIGURED = Settings(
    langfuse_public_key="pk-lf-test",
    langfuse_secret_key="sk-lf-test",
    langfuse_host="https://langfuse.example.com",
)


class TestCreateLangfuse:
    def test_disabled_without_env(self, monkeypatch, caplog):
        factory = Mock()
        monkeypatch.setattr(langfuse_tracing, "Langfuse", factory)

        with caplog.at_level(logging.WARNING, logger="event_search.langfuse"):
            assert create_langfuse(Settings(langfuse_public_key="pk")) is None

        factory.assert_not_called()
        assert "Langfuse tracing will be disabled" in caplog.text

    def test_builds_client_from_settings(self, monkeypatch):
        factory = Mock()
        monkeypatch.setattr(langfuse_tracing, "Langfuse", factory)

        assert create_langfuse(CONFIGURED) is factory.return_value
        factory.assert_called_once_with(
            public_key="pk-lf-test",
            secret_key="sk-lf-test",
            host="https://langfuse.example.com",
        )

    def test_construction_failure_disables_tracing(self, monkeypatch, caplog):
        monkeypatch.setattr(langfuse_tracing, "Langfuse", Mock(side_effect=ValueError("bad host")))

        with caplog.at_level(logging.ERROR, logger="event_search.langfuse"):
            assert create_langfuse(CONFIGURED) is None
        assert "Failed to initialise Langfuse" in caplog.text


class TestTraceHelpers:
    def test_start_trace_without_client(self):
        assert start_trace(None, name="x") is None

    def test_start_trace(self):
        client = Mock()
        trace = start_trace(client, name="cli:chat", input={"prompt": "hi"})
        assert trace is client.trace.return_value
        client.trace.assert_called_once_with(
            name="cli:chat", user_id=None, session_id=None, input={"prompt": "hi"}, metadata=None
        )

    def test_open_span_without_parent_is_null(self):
        span = open_span(None, name="s")
        assert isinstance(span, NullSpan)
        span.update(output="ignored")
        span.end()

    def test_open_span_and_generation_delegate_to_parent(self, mock_trace, mock_span):
        assert open_span(mock_trace, name="s", input={"q": 1}) is mock_span
        mock_trace.span.assert_called_once_with(name="s", input={"q": 1}, metadata=None)

        generation = open_generation(mock_trace, name="g", model="m")
        assert generation is mock_trace.generation.return_value
        assert isinstance(open_generation(None, name="g"), NullSpan)

    def test_end_trace_updates_and_flushes(self):
        client, trace = Mock(), Mock()
        end_trace(client, trace, output={"answer": "ok"})
        trace.update.assert_called_once_with(output={"answer": "ok"})
        client.flush.assert_called_once_with()

    def test_end_trace_error(self):
        client, trace = Mock(), Mock()
        end_trace(client, trace, error="failed")
        trace.update.assert_called_once_with(output={"error": "failed"}, tags=["error"])

    def test_end_trace_flush_failure_is_logged(self, caplog):
        client, trace = Mock(), Mock()
        client.flush.side_effect = RuntimeError("network")
        with caplog.at_level(logging.ERROR, logger="event_search.langfuse"):
            end_trace(client, trace, output="x")
        assert "Failed to flush Langfuse client" in caplog.text

    def test_end_trace_without_trace(self):
        client = Mock()
        end_trace(client, None, output="x")
        client.flush.assert_not_called()
