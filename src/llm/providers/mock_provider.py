from __future__ import annotations
import json
from typing import Optional

from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    def generate(self, *, system: str, user: str, json_mode: bool = False) -> Optional[str]:
        """
        Returns dummy responses so the relay can run without an OpenAI key.
        """
        if json_mode:
            lower_user = user.lower()
            tasks = [
                {
                    "title": "Review notes",
                    "notes": user[:200],
                    "minutes": 20,
                }
            ]
            if "affidavit" in lower_user:
                tasks.insert(0, {
                    "title": "Draft affidavit",
                    "notes": "Prepare the sworn statement",
                    "minutes": 45,
                    "tags": ["Legal"],
                })
            return json.dumps({"tasks": tasks})

        # Plain reply mode
        return f"Echo: {user}"
