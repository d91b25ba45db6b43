"""Environment configuration.

Values are read from the process environment.  A ``.env`` file in the working
directory is loaded first (existing variables win), so local development does
not need exported shell variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    google_api_key: Optional[str] = None
    google_cse_id: Optional[str] = None
    openai_api_key: Optional[str] = None
    langfuse_public_key: Optional[str] = None
    langfuse_secret_key: Optional[str] = None
    langfuse_host: Optional[str] = None
    llm_provider: str = "google"
    log_level: str = "INFO"

    @property
    def langfuse_enabled(self) -> bool:
        return bool(self.langfuse_public_key and self.langfuse_secret_key and self.langfuse_host)


def load_settings() -> Settings:
    """Build a :class:`Settings` snapshot from the current environment."""
    return Settings(
        google_api_key=os.getenv("GOOGLE_API_KEY") or None,
        google_cse_id=os.getenv("GOOGLE_CSE_ID") or None,
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        langfuse_public_key=os.getenv("LANGFUSE_PUBLIC_KEY") or None,
        langfuse_secret_key=os.getenv("LANGFUSE_SECRET_KEY") or None,
        langfuse_host=os.getenv("LANGFUSE_HOST") or None,
        llm_provider=(os.getenv("LLM_PROVIDER") or "google").lower(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
