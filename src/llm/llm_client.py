from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from llm.providers.base import LLMProvider
from llm.providers.mock_provider import MockProvider
from llm.providers.openai_provider import OpenAIProvider
from llm.schemas import TaskExtractionResult
from motion_bridge.config import BridgeConfig
from motion_bridge.errors import ConfigurationError, ReplyParseError

logger = logging.getLogger(__name__)

NO_REPLY = "No reply"

REPLY_SYSTEM_PROMPT = (
    "You are MotionBridge, a concise assistant that summarizes or responds to Motion task updates."
)

EXTRACTION_SYSTEM_PROMPT = (
    "You are MotionBridge, an assistant that turns free-form notes into Motion tasks. "
    "Reply with a JSON object only, shaped as "
    '{"tasks": [{"title": str, "notes": str, "minutes": int, '
    '"priority": "LOW"|"MEDIUM"|"HIGH", "tags": [str], "due": "YYYY-MM-DD" or null}]}. '
    "Split the notes into small actionable tasks of at most 50 minutes each. "
    "Omit fields you cannot infer."
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def _strip_fence(text: str) -> str:
    m = _FENCE_RE.match(text.strip())
    return m.group(1) if m else text.strip()


class LLMClient:
    """Wraps a provider with the two reply modes the relay needs."""

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    @classmethod
    def from_config(cls, config: BridgeConfig, client: Optional[httpx.Client] = None) -> "LLMClient":
        if config.llm_provider == "mock":
            return cls(MockProvider())
        if config.llm_provider != "openai":
            raise ConfigurationError(f"Unknown LLM_PROVIDER {config.llm_provider!r}")
        return cls(OpenAIProvider.from_config(config, client=client))

    def reply(self, message: str) -> str:
        content = self.provider.generate(system=REPLY_SYSTEM_PROMPT, user=message)
        if not content:
            return NO_REPLY
        return content

    def extract_tasks(self, text: str, command: str = "default") -> list[dict[str, Any]]:
        user = f"Command: {command}\nExtract tasks from these notes:\n{text}"
        content = self.provider.generate(
            system=EXTRACTION_SYSTEM_PROMPT, user=user, json_mode=True
        )
        if not content:
            raise ReplyParseError("Model returned an empty reply")

        try:
            data = json.loads(_strip_fence(content))
        except json.JSONDecodeError as e:
            logger.warning(f"Extraction reply is not JSON: {content[:80]!r}")
            raise ReplyParseError(f"Could not parse model reply as JSON: {e}") from e

        if isinstance(data, list):
            data = {"tasks": data}
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise ReplyParseError("Model reply has no tasks list")

        try:
            result = TaskExtractionResult.model_validate(data)
        except ValidationError as e:
            raise ReplyParseError(f"Model reply has malformed tasks: {e.error_count()} error(s)") from e

        logger.info(f"Model extracted {len(result.tasks)} task(s) for command {command!r}")
        return result.as_raw()
