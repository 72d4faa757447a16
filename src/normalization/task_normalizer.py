from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from classification.energy_classifier import EnergyClassifier, has_energy_tag
from motion_bridge.models import (
    DEFAULT_MINUTES,
    MAX_MINUTES,
    MIN_MINUTES,
    DomainDefaults,
    Priority,
    TaskRecord,
    defaults_for,
)

logger = logging.getLogger(__name__)

UNTITLED = "Untitled task"


def _first(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def normalize_minutes(value: Any) -> int:
    """Coerce a loose duration to whole minutes in [5, 50]; 25 when unusable."""
    if isinstance(value, bool) or value is None:
        return DEFAULT_MINUTES
    try:
        number = float(value)
    except OverflowError:
        # ints beyond float range
        return MAX_MINUTES if value > 0 else DEFAULT_MINUTES
    except (TypeError, ValueError):
        return DEFAULT_MINUTES
    if not math.isfinite(number) or number <= 0:
        return DEFAULT_MINUTES
    # half-up, not banker's rounding
    rounded = math.floor(number + 0.5)
    return max(MIN_MINUTES, min(MAX_MINUTES, rounded))


def merge_tags(*groups: Any) -> List[str]:
    merged: Dict[str, None] = {}
    for group in groups:
        if not isinstance(group, (list, tuple)):
            continue
        for tag in group:
            if tag is None:
                continue
            text = str(tag).strip()
            if text:
                merged.setdefault(text, None)
    return list(merged)


def parse_due(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text).isoformat()
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return None


def normalize_priority(value: Any, fallback: Priority) -> Priority:
    if isinstance(value, Priority):
        return value
    if isinstance(value, str):
        try:
            return Priority(value.strip().upper())
        except ValueError:
            logger.debug(f"Unknown priority {value!r}, using {fallback.value}")
    return fallback


class TaskNormalizer:
    """Turns loosely-typed task dicts into TaskRecord using domain defaults."""

    def __init__(self, classifier: Optional[EnergyClassifier] = None):
        self.classifier = classifier or EnergyClassifier()

    def normalize(
        self,
        raw: Any,
        defaults: Optional[DomainDefaults] = None,
        today: Optional[date] = None,
    ) -> TaskRecord:
        if isinstance(raw, str):
            raw = {"title": raw}
        if not isinstance(raw, dict):
            raise ValueError("Task must be an object")

        defaults = defaults or defaults_for(raw.get("domain"))

        title = str(_first(raw, "title", "name") or "").strip() or UNTITLED
        notes = _first(raw, "notes", "description")
        notes = str(notes) if notes is not None else ""

        minutes = normalize_minutes(_first(raw, "minutes", "duration"))

        tags = merge_tags(raw.get("tags"), raw.get("labels"), list(defaults.tags))
        if not has_energy_tag(tags):
            energy = self.classifier.classify(title, notes)
            if energy:
                tags.append(energy)

        due = parse_due(_first(raw, "due", "dueDate"))
        if due is None and defaults.due_offset_days is not None:
            base = today or datetime.now(timezone.utc).date()
            due = (base + timedelta(days=defaults.due_offset_days)).isoformat()

        priority = normalize_priority(raw.get("priority"), defaults.priority)
        domain = _first(raw, "domain")
        domain = str(domain).strip() if domain is not None else ""

        return TaskRecord(
            title=title,
            notes=notes,
            minutes=minutes,
            priority=priority,
            tags=tags,
            due=due,
            domain=domain or defaults.domain,
        )


def normalize_task(
    raw: Any,
    defaults: Optional[DomainDefaults] = None,
    today: Optional[date] = None,
) -> TaskRecord:
    return TaskNormalizer().normalize(raw, defaults, today=today)
