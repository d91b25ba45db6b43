"""Exceptions raised by the event search package."""

from __future__ import annotations


class EventSearchError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(EventSearchError, ValueError):
    """A caller supplied an empty or otherwise unusable argument."""


class ConfigurationError(EventSearchError):
    """Required configuration (API keys, provider names) is missing or invalid."""


class UpstreamInvocationError(EventSearchError):
    """The search tool failed without raising an error of its own."""


class ContractViolationError(EventSearchError, TypeError):
    """The search tool returned something other than a string."""


class AgentError(EventSearchError):
    """The model produced a tool call the agent cannot execute."""
