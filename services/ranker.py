"""
Ranker - index search with intent boosts and priority re-scoring.
Version: 1.0

Single responsibility: turn an expanded query into an ordered, truncated
list of RankedResult.

Steps:
1. Blank query -> browsing default (first BROWSE_LIMIT entries, no score)
2. One index call with intent boosts (or DEFAULT_BOOSTS), prefix, fuzzy
3. Drop hits whose id is not in the catalog
4. score = index score + priority * PRIORITY_WEIGHT
5. Sort descending (stable), keep MAX_RESULTS
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from config import Settings, get_settings
from models import Entry
from services.intents import DEFAULT_BOOSTS, Intent
from services.search_index import SearchIndex
from services.text_normalizer import matched_on

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedResult:
    """An entry with its adjusted score (None when browsing)."""
    entry: Entry
    score: Optional[float] = None
    matched_on: Tuple[str, ...] = ()


class Ranker:
    """Delegates to the index, then blends in entry priority."""

    def __init__(
        self,
        index: SearchIndex,
        entries: Sequence[Entry],
        settings: Optional[Settings] = None
    ):
        self._index = index
        self._entries: Tuple[Entry, ...] = tuple(entries)
        self._by_id: Dict[str, Entry] = {e.id: e for e in self._entries}
        self._settings = settings or get_settings()

    def boosts_for(self, intent: Optional[Intent]) -> Mapping[str, float]:
        return intent.boosts if intent is not None else DEFAULT_BOOSTS

    def priority_of(self, entry: Entry) -> float:
        if entry.priority is None:
            return self._settings.DEFAULT_PRIORITY
        return entry.priority

    def browse(self) -> List[RankedResult]:
        """Browsing default for an empty query: catalog order, no scores."""
        return [RankedResult(entry=e) for e in self._entries[:self._settings.BROWSE_LIMIT]]

    def rank(
        self,
        expanded_query: str,
        intent: Optional[Intent] = None,
        raw_query: Optional[str] = None
    ) -> List[RankedResult]:
        """
        Rank catalog entries for a query.

        Args:
            expanded_query: Query after intent expansion
            intent: Detected intent (selects field boosts)
            raw_query: User's query, used for the matched-on explanation

        Returns:
            At most MAX_RESULTS results, best first
        """
        query = (expanded_query or "").strip()
        if not query:
            return self.browse()

        settings = self._settings
        hits = self._index.search(
            query,
            boost=self.boosts_for(intent),
            prefix=settings.PREFIX_SEARCH,
            fuzzy=settings.FUZZY_TOLERANCE,
        )

        explain_query = raw_query if raw_query is not None else query
        ranked: List[RankedResult] = []
        dropped = 0
        for hit in hits:
            entry = self._by_id.get(hit.id)
            if entry is None:
                dropped += 1
                continue
            score = hit.score + self.priority_of(entry) * settings.PRIORITY_WEIGHT
            ranked.append(RankedResult(
                entry=entry,
                score=score,
                matched_on=matched_on(entry, explain_query, settings.MATCHED_ON_LIMIT),
            ))

        if dropped:
            logger.debug(f"RANK: dropped {dropped} hits with unknown ids")

        ranked.sort(key=lambda r: r.score, reverse=True)
        top = ranked[:settings.MAX_RESULTS]
        logger.debug(
            f"RANK: '{query}' intent={intent.id if intent else None} "
            f"hits={len(hits)} returned={len(top)}"
        )
        return top
