"""
Intent Classifier - rule-based intent detection.
Version: 1.0

Keyword-containment voting, no ML:
1. Lowercase the query
2. For each intent (ascending Intent.order) count triggers contained in it
3. Strictly higher hit count replaces the current best

Because replacement needs a strictly greater count, the earliest-declared
intent wins ties. At least one hit is required, otherwise no intent.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from services.intents import DEFAULT_INTENTS, Intent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentMatch:
    """Winning intent and how many of its triggers were found."""
    intent: Intent
    hits: int


class IntentClassifier:
    """Maps raw query text to at most one Intent."""

    def __init__(self, intents: Optional[Sequence[Intent]] = None):
        """
        Args:
            intents: Configured intents; defaults to the built-in set
        """
        configured = DEFAULT_INTENTS if intents is None else intents
        # Explicit total order, independent of the sequence passed in
        self._intents: Tuple[Intent, ...] = tuple(sorted(configured, key=lambda i: i.order))

    @property
    def intents(self) -> Tuple[Intent, ...]:
        return self._intents

    def match(self, query: Optional[str]) -> Optional[IntentMatch]:
        """Best intent with its hit count, or None."""
        query_lower = str(query or "").lower()
        if not query_lower.strip():
            return None

        best: Optional[Intent] = None
        best_hits = 0
        for intent in self._intents:
            hits = intent.count_hits(query_lower)
            if hits > best_hits:
                best_hits = hits
                best = intent

        if best is None:
            logger.debug(f"INTENT: none for '{query_lower}'")
            return None

        logger.debug(f"INTENT: {best.id} (hits={best_hits}) for '{query_lower}'")
        return IntentMatch(intent=best, hits=best_hits)

    def classify(self, query: Optional[str]) -> Optional[Intent]:
        """Best intent for the query, or None."""
        result = self.match(query)
        return result.intent if result else None
