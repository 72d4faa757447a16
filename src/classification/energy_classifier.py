from __future__ import annotations

import re
from typing import Iterable, Optional

ENERGY_TAG_PREFIX = "Energy:"

# Order matters: the first matching group wins. Keywords match whole words
# plus a short inflection (s, ed, ing), so "court" does not match "courtesy".
ENERGY_KEYWORDS = (
    (
        "Energy:High",
        (
            "affidavit", "legal", "lawsuit", "litigation", "court", "deposition",
            "subpoena", "contract", "motion to", "filing", "brief", "testimony",
        ),
    ),
    (
        "Energy:Medium",
        (
            "plan", "planning", "strategy", "strategic", "roadmap", "proposal", "design",
            "budget", "forecast", "outline", "draft", "research",
        ),
    ),
    (
        "Energy:Low",
        (
            "email", "call", "reply", "invoice", "pay", "payment", "schedule", "scheduling",
            "admin", "errand", "book", "renew", "organize", "organizing", "clean", "cleanup",
            "order", "update",
        ),
    ),
)

_PATTERNS = [
    (label, re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")(?:s|es|d|ed|ing)?\b"))
    for label, keywords in ENERGY_KEYWORDS
]


class EnergyClassifier:
    """Keyword heuristic estimating how much focus a task needs."""

    def classify(self, title: str, notes: str = "") -> Optional[str]:
        text = f"{title} {notes}".lower()
        for label, pattern in _PATTERNS:
            if pattern.search(text):
                return label
        return None


def has_energy_tag(tags: Iterable[str]) -> bool:
    return any(t.startswith(ENERGY_TAG_PREFIX) for t in tags)
