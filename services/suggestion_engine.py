"""
Suggestion Engine - "did you mean" terms from the tag vocabulary.
Version: 1.0

Only runs in low-result situations (non-empty query, few results).

Candidates:
- direct: vocabulary terms containing the query
- fuzzy:  length within SUGGESTION_MAX_LENGTH_DIFF and Levenshtein
          distance within SUGGESTION_MAX_DISTANCE

Direct first, de-duplicated. Nothing found -> quick-start terms.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from config import Settings, get_settings
from services.edit_distance import levenshtein
from services.intents import QUICK_START_TERMS

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """Proposes vocabulary terms close to the raw query."""

    def __init__(
        self,
        vocabulary: Sequence[str],
        quick_start: Sequence[str] = QUICK_START_TERMS,
        settings: Optional[Settings] = None
    ):
        self._vocabulary: Tuple[str, ...] = tuple(vocabulary)
        self._quick_start: Tuple[str, ...] = tuple(quick_start)
        self._settings = settings or get_settings()

    def direct_candidates(self, query: str) -> List[str]:
        return [term for term in self._vocabulary if query in term]

    def fuzzy_candidates(self, query: str) -> List[str]:
        max_diff = self._settings.SUGGESTION_MAX_LENGTH_DIFF
        max_distance = self._settings.SUGGESTION_MAX_DISTANCE
        candidates = []
        for term in self._vocabulary:
            if abs(len(term) - len(query)) > max_diff:
                continue
            if levenshtein(term, query) <= max_distance:
                candidates.append(term)
        return candidates

    def suggest(self, raw_query: Optional[str], result_count: int) -> List[str]:
        """
        Suggested terms for a sparse result set.

        Args:
            raw_query: Query as typed
            result_count: Number of ranked results shown

        Returns:
            Up to SUGGESTION_LIMIT terms, or [] when not applicable
        """
        query = str(raw_query or "").lower().strip()
        if not query:
            return []
        if result_count > self._settings.SUGGESTION_MAX_RESULT_COUNT:
            return []

        limit = self._settings.SUGGESTION_LIMIT
        combined = list(dict.fromkeys(self.direct_candidates(query) + self.fuzzy_candidates(query)))
        if not combined:
            logger.debug(f"SUGGEST: no vocabulary match for '{query}', using quick-start terms")
            return list(self._quick_start[:limit])

        logger.debug(f"SUGGEST: '{query}' -> {combined[:limit]}")
        return combined[:limit]
