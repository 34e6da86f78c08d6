"""
Intent Configuration
Version: 1.0

Static, rule-based intents (no ML). Each intent carries:
- triggers: words/phrases that signal the intent (substring match)
- message: what the assistant banner says
- expansion_terms: extra query words appended before search
- boosts: per-field multipliers handed to the full-text index

Declaration order is the tie-break order. It is materialized as Intent.order
when the configuration is built, so nothing depends on dict/list iteration
order at classification time.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

logger = logging.getLogger(__name__)


# Searchable fields of an Entry, as known by the index
SEARCH_FIELDS: Tuple[str, ...] = ("name", "tags", "summary", "org")

# Used when no intent matched
DEFAULT_BOOSTS: Mapping[str, float] = MappingProxyType({
    "name": 2.0,
    "tags": 2.0,
    "summary": 1.2,
    "org": 1.1,
})

EMPTY_QUERY_MESSAGE = "Ask me something like **pay water bill**, **report pothole**, or **school phone**."
FALLBACK_MESSAGE = "Okay - I'll try to find the best match."

# Canned example queries: clickable shortcuts and the did-you-mean fallback
QUICK_START_TERMS: Tuple[str, ...] = (
    "pay water bill",
    "report pothole",
    "trash pickup",
    "police non emergency",
    "school phone",
    "hours",
    "directions",
    "animal control",
)


@dataclass(frozen=True)
class Intent:
    """A named trigger pattern with its message, expansion and boosts."""
    id: str
    order: int
    triggers: Tuple[str, ...]
    message: str
    expansion_terms: Tuple[str, ...] = ()
    boosts: Mapping[str, float] = field(default_factory=lambda: DEFAULT_BOOSTS)

    def __post_init__(self):
        if not self.triggers:
            raise ValueError(f"Intent '{self.id}' must have at least one trigger")
        for field_name, weight in self.boosts.items():
            if weight <= 0:
                raise ValueError(
                    f"Intent '{self.id}' boost for '{field_name}' must be positive, got {weight}"
                )

    def count_hits(self, query_lower: str) -> int:
        """Number of triggers contained in the (already lowercased) query."""
        return sum(1 for trigger in self.triggers if trigger in query_lower)


# Declaration order matters: earlier intents win ties
INTENT_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "id": "pay_bill",
        "triggers": ["pay", "payment", "bill", "billing", "invoice", "late fee"],
        "message": "Sounds like you're trying to **pay a bill / handle billing**.",
        "expansion_terms": ["pay bill", "billing", "payment"],
        "boosts": {"tags": 2.5, "name": 2.0, "summary": 1.2, "org": 1.1},
    },
    {
        "id": "report_issue",
        "triggers": ["report", "complaint", "problem", "pothole", "broken", "noise", "leak", "outage"],
        "message": "Sounds like you want to **report an issue**.",
        "expansion_terms": ["report", "complaint", "service request"],
        "boosts": {"tags": 2.6, "name": 1.8, "summary": 1.3, "org": 1.1},
    },
    {
        "id": "hours",
        "triggers": ["hours", "open", "close", "closing", "time", "when"],
        "message": "Sounds like you're looking for **hours / when something is open**.",
        "expansion_terms": ["hours", "open", "close"],
        "boosts": {"summary": 1.5, "tags": 2.0, "name": 1.8, "org": 1.1},
    },
    {
        "id": "phone",
        "triggers": ["phone", "call", "number", "contact"],
        "message": "Sounds like you need a **phone number / contact**.",
        "expansion_terms": ["phone", "call", "contact"],
        "boosts": {"name": 2.2, "tags": 2.0, "summary": 1.2, "org": 1.1},
    },
    {
        "id": "directions",
        "triggers": ["address", "directions", "where", "location", "map"],
        "message": "Sounds like you're looking for an **address / directions**.",
        "expansion_terms": ["address", "directions", "map"],
        "boosts": {"tags": 2.0, "summary": 1.3, "name": 1.7, "org": 1.1},
    },
    {
        "id": "school",
        "triggers": ["school", "elementary", "middle", "high", "bus", "enroll", "registration"],
        "message": "Sounds like you're looking for **school info**.",
        "expansion_terms": ["school", "enroll", "registration"],
        "boosts": {"tags": 2.5, "name": 2.2, "summary": 1.2, "org": 1.2},
    },
]


def build_intents(definitions: Sequence[Mapping[str, Any]]) -> Tuple[Intent, ...]:
    """
    Build immutable Intent objects, assigning order by position.

    Raises:
        ValueError: duplicate id, empty trigger list or non-positive boost
    """
    intents = []
    seen_ids = set()
    for position, definition in enumerate(definitions):
        intent_id = definition["id"]
        if intent_id in seen_ids:
            raise ValueError(f"Duplicate intent id: {intent_id}")
        seen_ids.add(intent_id)

        boosts = definition.get("boosts") or DEFAULT_BOOSTS
        intents.append(Intent(
            id=intent_id,
            order=position,
            triggers=tuple(t.lower() for t in definition.get("triggers", []) if t),
            message=definition.get("message", FALLBACK_MESSAGE),
            expansion_terms=tuple(t for t in definition.get("expansion_terms", []) if t),
            boosts=MappingProxyType({k: float(v) for k, v in boosts.items()}),
        ))

    logger.debug(f"Built {len(intents)} intents: {[i.id for i in intents]}")
    return tuple(intents)


DEFAULT_INTENTS: Tuple[Intent, ...] = build_intents(INTENT_DEFINITIONS)
