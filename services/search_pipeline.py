"""
Search Pipeline - query understanding and ranking entry point.
Version: 1.0

SearchContext is built ONCE at startup (catalog, index, vocabulary and the
pipeline components) and is immutable afterwards. Every call to
SearchPipeline.run() is a pure function of (raw query, context):

    raw query
      -> IntentClassifier
      -> QueryExpander
      -> Ranker (via the search index)
      -> AmbiguityDetector + SuggestionEngine (independent)
      -> SearchResponse

Usage:
    context = SearchContext.build(load_catalog())
    response = SearchPipeline(context).run("pay water bill")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import Settings, get_settings
from models import Entry
from services.ambiguity_detector import AmbiguityDetector, ClarifierPrompt
from services.intent_classifier import IntentClassifier
from services.intents import (
    DEFAULT_INTENTS,
    EMPTY_QUERY_MESSAGE,
    FALLBACK_MESSAGE,
    QUICK_START_TERMS,
    Intent,
)
from services.query_expander import QueryExpander
from services.ranker import RankedResult, Ranker
from services.search_index import CatalogSearchIndex, SearchIndex
from services.suggestion_engine import SuggestionEngine
from services.text_normalizer import build_tag_vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResponse:
    """Result bundle handed to the presentation layer."""
    query: str
    message: str
    results: List[RankedResult] = field(default_factory=list)
    intent_id: Optional[str] = None
    expanded_query: str = ""
    clarifier: Optional[ClarifierPrompt] = None
    suggestions: List[str] = field(default_factory=list)
    meta: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "query": self.query,
            "message": self.message,
            "intent_id": self.intent_id,
            "expanded_query": self.expanded_query,
            "meta": self.meta,
            "results": [
                {
                    "entry": r.entry.model_dump(mode="json"),
                    "score": r.score,
                    "matched_on": list(r.matched_on),
                    "primary_link": (
                        r.entry.primary_link().model_dump(mode="json")
                        if r.entry.primary_link() else None
                    ),
                    "phone_link": r.entry.contact.phone_link(),
                }
                for r in self.results
            ],
            "clarifier": (
                {
                    "prompt": self.clarifier.prompt,
                    "options": [
                        {"label": o.label, "query": o.query} for o in self.clarifier.options
                    ],
                }
                if self.clarifier else None
            ),
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class SearchContext:
    """Immutable catalog + components shared by every pipeline call."""
    entries: Tuple[Entry, ...]
    index: SearchIndex
    vocabulary: Tuple[str, ...]
    quick_start: Tuple[str, ...]
    classifier: IntentClassifier
    expander: QueryExpander
    ranker: Ranker
    ambiguity: AmbiguityDetector
    suggestions: SuggestionEngine
    settings: Settings

    @classmethod
    def build(
        cls,
        entries: Sequence[Entry],
        settings: Optional[Settings] = None,
        intents: Sequence[Intent] = DEFAULT_INTENTS,
        index: Optional[SearchIndex] = None,
        quick_start: Sequence[str] = QUICK_START_TERMS
    ) -> "SearchContext":
        """
        Build the context from a fully loaded catalog.

        Args:
            entries: Normalized catalog entries, catalog order
            settings: Settings (defaults to get_settings())
            intents: Intent configuration
            index: Search index; a CatalogSearchIndex is built when omitted
            quick_start: Canned example queries
        """
        settings = settings or get_settings()
        entries = tuple(entries)
        index = index if index is not None else CatalogSearchIndex(entries)
        vocabulary = build_tag_vocabulary(entries)
        quick_start = tuple(quick_start)

        context = cls(
            entries=entries,
            index=index,
            vocabulary=vocabulary,
            quick_start=quick_start,
            classifier=IntentClassifier(intents),
            expander=QueryExpander(),
            ranker=Ranker(index, entries, settings),
            ambiguity=AmbiguityDetector(settings.AMBIGUITY_RATIO_THRESHOLD),
            suggestions=SuggestionEngine(vocabulary, quick_start, settings),
            settings=settings,
        )
        logger.info(
            f"SEARCH CONTEXT READY: {len(entries)} entries, "
            f"{len(vocabulary)} tags, {len(context.classifier.intents)} intents"
        )
        return context


class SearchPipeline:
    """Runs classify -> expand -> rank -> clarify/suggest for one query."""

    def __init__(self, context: SearchContext):
        self.context = context

    def run(self, raw_query: Optional[str]) -> SearchResponse:
        """
        Process one query.

        Args:
            raw_query: Query as typed (may be empty or None)

        Returns:
            SearchResponse bundle
        """
        ctx = self.context
        raw = (raw_query or "").strip()

        if not raw:
            return SearchResponse(
                query="",
                message=EMPTY_QUERY_MESSAGE,
                results=ctx.ranker.browse(),
                meta=f"Loaded {len(ctx.entries)} entries. Try a chip.",
            )

        intent = ctx.classifier.classify(raw)
        expanded = ctx.expander.expand(raw, intent)
        results = ctx.ranker.rank(expanded, intent, raw_query=raw)

        suggestions = ctx.suggestions.suggest(raw, len(results))
        clarifier = ctx.ambiguity.detect(raw, results)

        if results:
            meta = f"Showing {len(results)} results for \"{raw}\"."
        else:
            meta = (
                f"No results for \"{raw}\". "
                f"Try different words (e.g., \"trash\", \"permit\", \"pothole\")."
            )

        logger.debug(
            f"PIPELINE: '{raw}' intent={intent.id if intent else None} "
            f"results={len(results)} clarifier={clarifier is not None} "
            f"suggestions={len(suggestions)}"
        )

        return SearchResponse(
            query=raw,
            message=intent.message if intent else FALLBACK_MESSAGE,
            results=results,
            intent_id=intent.id if intent else None,
            expanded_query=expanded,
            clarifier=clarifier,
            suggestions=suggestions,
            meta=meta,
        )
