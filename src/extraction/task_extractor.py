from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from llm.llm_client import LLMClient
from motion_bridge.models import DOMAIN_DEFAULTS

_SLASH_COMMAND_RE = re.compile(r"^\s*/(?P<command>[a-zA-Z]+)\b\s*(?P<rest>.*)$", re.DOTALL)


def split_command(text: str, command: Optional[str] = None) -> Tuple[str, str]:
    """Resolve the command label and strip a leading slash command like '/legal ...'."""
    m = _SLASH_COMMAND_RE.match(text)
    if m and m.group("command").lower() in DOMAIN_DEFAULTS:
        text = m.group("rest").strip()
        command = command or m.group("command")
    label = (command or "default").strip().lower()
    return (label if label in DOMAIN_DEFAULTS else "default"), text


class TaskExtractor:

    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    def extract(self, text: str, command: str = "default") -> list[dict[str, Any]]:
        return self.llm.extract_tasks(text, command=command)
