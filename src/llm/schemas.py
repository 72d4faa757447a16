from __future__ import annotations
from typing import Any, Dict, List
from pydantic import BaseModel, Field

class ExtractedTask(BaseModel):
    """One task as the model returns it. Types stay loose; TaskNormalizer coerces them."""

    model_config = {"extra": "allow"}

    title: Any = None
    notes: Any = None
    minutes: Any = None
    priority: Any = None
    tags: Any = None
    due: Any = None

class TaskExtractionResult(BaseModel):
    tasks: List[ExtractedTask] = Field(default_factory=list)

    def as_raw(self) -> List[Dict[str, Any]]:
        return [t.model_dump(exclude_none=True) for t in self.tasks]
