"""
Query Expander - intent synonym expansion.
Version: 1.0

Appends the matched intent's expansion terms to the user query so the
fuzzy/prefix index sees related words.

Philosophy:
- EXPAND, don't replace - the original query is always kept verbatim
- Terms already contained in the query are not repeated

Examples:
- "water bill" + pay_bill  -> "water bill pay bill billing payment"
- "pay bill billing payment" + pay_bill -> unchanged
"""

import logging
from typing import List, Optional

from services.intents import Intent

logger = logging.getLogger(__name__)


class QueryExpander:
    """Builds the expanded query handed to the ranker."""

    def missing_terms(self, query: str, intent: Intent) -> List[str]:
        """Expansion terms not already contained in the query."""
        query_lower = query.lower()
        return [term for term in intent.expansion_terms if term and term.lower() not in query_lower]

    def expand(self, raw_query: Optional[str], intent: Optional[Intent]) -> str:
        """
        Expand query with the intent's synonyms.

        Args:
            raw_query: Query as typed by the user
            intent: Detected intent, or None

        Returns:
            Trimmed query, followed by any missing expansion terms
        """
        query = (raw_query or "").strip()
        if intent is None:
            return query

        extras = self.missing_terms(query, intent)
        if not extras:
            return query

        expanded = f"{query} {' '.join(extras)}".strip()
        logger.debug(f"EXPAND: '{query}' -> '{expanded}' (intent={intent.id})")
        return expanded
