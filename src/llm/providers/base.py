from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, system: str, user: str, json_mode: bool = False) -> Optional[str]:
        """
        Must return the first completion as TEXT, or None when the reply is empty.
        JSON parsing/validation happens in LLMClient.
        """
        raise NotImplementedError
