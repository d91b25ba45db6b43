"""Agent configuration loader.

This project keeps per-agent model settings and system prompts in
`event_search/agent_config.yaml`.

The loader is intentionally small and tolerant:
- If the YAML file is missing or invalid, it falls back to empty defaults.
- Callers can still override model names explicitly at call sites.

The YAML schema:

- default_model: <string | null>
- default_provider: <"google" | "openai" | null>
- search_agent:
    system_prompt: <string | null>
    model_name: <string | null>
    provider: <string | null>
    temperature: <number | null>
    max_output_tokens: <integer | null>
    max_tool_rounds: <integer | null>
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Any

import yaml


DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 2048
DEFAULT_MAX_TOOL_ROUNDS = 1


@dataclass(frozen=True)
class AgentSettings:
    model_name: Optional[str]
    system_prompt: Optional[str]
    provider: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS


def _default_config_path() -> str:
    # event_search/tools/agent_config.py -> event_search/agent_config.yaml
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "agent_config.yaml"))


@lru_cache(maxsize=1)
def load_agent_config(path: Optional[str] = None) -> dict[str, Any]:
    config_path = path or os.getenv("AGENT_CONFIG_PATH") or _default_config_path()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError):
        # Keep this loader non-fatal; a broken file should not stop the CLI.
        return {}


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def get_agent_settings(agent_name: str, config: Optional[dict[str, Any]] = None) -> AgentSettings:
    if config is None:
        config = load_agent_config()
    default_model = config.get("default_model")
    default_provider = config.get("default_provider")

    agent_block = config.get(agent_name, {})
    if not isinstance(agent_block, dict):
        agent_block = {}

    model_name = agent_block.get("model_name")
    if model_name is None:
        model_name = default_model

    provider = agent_block.get("provider")
    if provider is None:
        provider = default_provider

    system_prompt = agent_block.get("system_prompt")

    return AgentSettings(
        model_name=model_name if isinstance(model_name, str) else None,
        system_prompt=system_prompt if isinstance(system_prompt, str) else None,
        provider=provider.lower() if isinstance(provider, str) else None,
        temperature=_number(agent_block.get("temperature"), DEFAULT_TEMPERATURE),
        max_output_tokens=_positive_int(agent_block.get("max_output_tokens"), DEFAULT_MAX_OUTPUT_TOKENS),
        max_tool_rounds=_positive_int(agent_block.get("max_tool_rounds"), DEFAULT_MAX_TOOL_ROUNDS),
    )
