from __future__ import annotations
import logging
from typing import Optional

import httpx

from motion_bridge.config import BridgeConfig
from motion_bridge.errors import ConfigurationError, UpstreamError
from .base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        client: Optional[httpx.Client] = None,
        timeout_s: float = 30.0,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.client = client
        self.timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: BridgeConfig, client: Optional[httpx.Client] = None) -> "OpenAIProvider":
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model,
            base_url=config.openai_base_url,
            client=client,
            timeout_s=config.http_timeout_s,
        )

    def generate(self, *, system: str, user: str, json_mode: bool = False) -> Optional[str]:
        if not self.api_key:
            raise ConfigurationError("Missing OPENAI_API_KEY secret")

        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        if self.client is not None:
            r = self.client.post(url, headers=headers, json=payload)
        else:
            with httpx.Client(timeout=self.timeout_s) as client:
                r = client.post(url, headers=headers, json=payload)

        if not r.is_success:
            logger.error(f"OpenAI call failed with {r.status_code}")
            raise UpstreamError(
                f"OpenAI API error ({r.status_code}): {r.text}",
                status=r.status_code,
                detail=r.text,
            )

        try:
            data = r.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error(f"OpenAI returned a non-object body with {r.status_code}")
            raise UpstreamError(
                f"OpenAI API error ({r.status_code}): {r.text}",
                status=r.status_code,
                detail=r.text,
            )

        choices = data.get("choices") or []
        if not choices:
            return None
        return (choices[0].get("message") or {}).get("content")
