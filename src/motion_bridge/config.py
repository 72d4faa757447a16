from __future__ import annotations

import os
from dataclasses import dataclass


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


@dataclass(frozen=True)
class BridgeConfig:
    """Read-only settings for one request. Secrets may be empty; clients check them."""

    openai_api_key: str = ""
    motion_api_key: str = ""
    motion_workspace_id: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    motion_base_url: str = "https://api.usemotion.com/v1"
    llm_provider: str = "openai"
    http_timeout_s: float = 30.0
    motion_max_attempts: int = 3

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        return cls(
            openai_api_key=_env("OPENAI_API_KEY"),
            motion_api_key=_env("MOTION_API_KEY"),
            motion_workspace_id=_env("MOTION_WORKSPACE_ID"),
            openai_model=_env("OPENAI_MODEL", "gpt-4o-mini"),
            openai_base_url=_env("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
            motion_base_url=_env("MOTION_BASE_URL", "https://api.usemotion.com/v1").rstrip("/"),
            llm_provider=_env("LLM_PROVIDER", "openai").lower(),
            http_timeout_s=float(_env("HTTP_TIMEOUT_S", "30")),
            motion_max_attempts=max(1, int(_env("MOTION_MAX_ATTEMPTS", "3"))),
        )
