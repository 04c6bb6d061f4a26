"""
Translator configuration for the chat endpoint.

Credentials and model selection come from the environment (or the
project-root ``.env``). Without ``GROQ_API_KEY`` the chat endpoint
answers with a translator failure instead of calling out.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("RECIPE_TRANSLATOR_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    # A query string is short; keep completions tight.
    max_tokens: int = 256
    temperature: float = 0.1
    # 0 disables the SDK's automatic retries.
    max_retries: int = 0
    enabled: bool = _env_flag("RECIPE_CHAT_ENABLED", True)


DEFAULT_LLM_CONFIG = LLMConfig()
