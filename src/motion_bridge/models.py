from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Optional, List, Dict, Tuple

from pydantic import BaseModel, Field, field_validator


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


MIN_MINUTES = 5
MAX_MINUTES = 50
DEFAULT_MINUTES = 25


class TaskRecord(BaseModel):
    """Canonical task handed to Motion. Lives for one request only."""

    title: str = Field(..., min_length=1)
    notes: str = ""
    minutes: int = Field(DEFAULT_MINUTES, ge=MIN_MINUTES, le=MAX_MINUTES)
    priority: Priority = Priority.MEDIUM
    tags: List[str] = Field(default_factory=list)
    due: Optional[str] = None  # YYYY-MM-DD
    domain: str = "General"

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("tags")
    @classmethod
    def tags_unique(cls, v: List[str]) -> List[str]:
        # dict keeps first-seen order
        return list(dict.fromkeys(v))


@dataclass(frozen=True)
class DomainDefaults:
    domain: str
    priority: Priority = Priority.MEDIUM
    tags: Tuple[str, ...] = field(default_factory=tuple)
    due_offset_days: Optional[int] = None


DOMAIN_DEFAULTS: Dict[str, DomainDefaults] = {
    "legal": DomainDefaults("Legal", Priority.HIGH, ("Legal",), 2),
    "biz": DomainDefaults("Business", Priority.MEDIUM, ("Business",), 7),
    "personal": DomainDefaults("Personal", Priority.LOW, ("Personal",), None),
    "default": DomainDefaults("General", Priority.MEDIUM, (), None),
}


def defaults_for(label: Any) -> DomainDefaults:
    """Look up domain defaults by command/domain label, falling back to 'default'."""
    key = label.strip().lower() if isinstance(label, str) else ""
    return DOMAIN_DEFAULTS.get(key, DOMAIN_DEFAULTS["default"])


ItemStatus = Literal["ok", "error"]


class ItemResult(BaseModel):
    index: int
    status: ItemStatus
    task: Optional[Any] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, index: int, task: Any) -> "ItemResult":
        return cls(index=index, status="ok", task=task)

    @classmethod
    def error(cls, index: int, message: str) -> "ItemResult":
        return cls(index=index, status="error", message=message)

    def to_dict(self) -> Dict[str, Any]:
        # Only one of task/message is emitted; the Motion reply is passed through untouched.
        data: Dict[str, Any] = {"index": self.index, "status": self.status}
        if self.status == "ok":
            data["task"] = self.task
        else:
            data["message"] = self.message
        return data
