"""
Search Index - in-memory fuzzy/prefix full-text index over the catalog.
Version: 1.0

The ranker only depends on the SearchIndex contract:

    search(query, boost, prefix, fuzzy) -> [SearchHit(id, score), ...]

CatalogSearchIndex is the shipped implementation:
- one BM25+ model (rank_bm25) per searchable field
- each query token expands into derived terms from the index vocabulary:
    exact   weight 1.0
    prefix  weight 0.375 * len(term) / (len(term) + 0.3 * extra_chars)
    fuzzy   weight 0.45  * len(term) / (len(term) + distance)
- document score = sum(boost[field] * weight * bm25(term, doc)) over
  fields and derived terms; only documents containing the term contribute
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from rank_bm25 import BM25Plus

from models import Entry
from services.edit_distance import levenshtein
from services.intents import SEARCH_FIELDS
from services.text_normalizer import tokenize

logger = logging.getLogger(__name__)

PREFIX_WEIGHT = 0.375
FUZZY_WEIGHT = 0.45
MAX_FUZZY_DISTANCE = 6


@dataclass(frozen=True)
class SearchHit:
    """Raw relevance of one entry for a query."""
    id: str
    score: float


class SearchIndex(Protocol):
    """Contract the ranker relies on."""

    def search(
        self,
        query: str,
        boost: Mapping[str, float],
        prefix: bool,
        fuzzy: float
    ) -> List[SearchHit]:
        ...


def field_text(entry: Entry, field_name: str) -> str:
    """Searchable text of one entry field."""
    if field_name == "tags":
        return " ".join(entry.tags)
    return str(getattr(entry, field_name, "") or "")


def fuzzy_distance_for(token: str, fuzzy: float) -> int:
    """Allowed edit distance for a token (half-up rounding, capped)."""
    if fuzzy <= 0:
        return 0
    return min(int(len(token) * fuzzy + 0.5), MAX_FUZZY_DISTANCE)


class CatalogSearchIndex:
    """
    BM25+ index over Entry fields with prefix and fuzzy term expansion.

    Built once from an immutable entry sequence; read-only afterwards.
    """

    def __init__(self, entries: Sequence[Entry], fields: Sequence[str] = SEARCH_FIELDS):
        self._ids: Tuple[str, ...] = tuple(e.id for e in entries)
        self._fields: Tuple[str, ...] = tuple(fields)
        self._models: Dict[str, BM25Plus] = {}
        self._postings: Dict[str, Dict[str, List[int]]] = {}

        vocabulary = set()
        for field_name in self._fields:
            corpus = [tokenize(field_text(e, field_name)) for e in entries]
            if not any(corpus):
                # BM25 needs at least one token in the field
                continue

            self._models[field_name] = BM25Plus(corpus)
            postings: Dict[str, List[int]] = defaultdict(list)
            for doc_index, tokens in enumerate(corpus):
                for term in dict.fromkeys(tokens):
                    postings[term].append(doc_index)
            self._postings[field_name] = dict(postings)
            vocabulary.update(postings)

        self._vocabulary: Tuple[str, ...] = tuple(sorted(vocabulary))
        logger.info(
            f"INDEX: built for {len(self._ids)} entries, "
            f"{len(self._models)} fields, {len(self._vocabulary)} terms"
        )

    @property
    def size(self) -> int:
        return len(self._ids)

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        return self._vocabulary

    def derive_terms(self, token: str, prefix: bool, fuzzy: float) -> Dict[str, float]:
        """Index terms a query token matches, with their weights."""
        derived: Dict[str, float] = {}
        max_distance = fuzzy_distance_for(token, fuzzy)

        for term in self._vocabulary:
            if term == token:
                derived[term] = 1.0
                continue

            weight: Optional[float] = None
            if prefix and term.startswith(token):
                extra = len(term) - len(token)
                weight = PREFIX_WEIGHT * len(term) / (len(term) + 0.3 * extra)

            if max_distance and abs(len(term) - len(token)) <= max_distance:
                distance = levenshtein(term, token)
                if distance <= max_distance:
                    fuzzy_weight = FUZZY_WEIGHT * len(term) / (len(term) + distance)
                    weight = fuzzy_weight if weight is None else max(weight, fuzzy_weight)

            if weight is not None:
                derived[term] = weight

        return derived

    def search(
        self,
        query: str,
        boost: Optional[Mapping[str, float]] = None,
        prefix: bool = False,
        fuzzy: float = 0.0
    ) -> List[SearchHit]:
        """
        Score entries for a query.

        Args:
            query: Free text (tokenized internally)
            boost: field -> multiplier; fields not listed use 1.0
            prefix: Allow prefix matches ("perm" -> "permit")
            fuzzy: Relative edit-distance tolerance (0 disables)

        Returns:
            Hits with positive scores, best first
        """
        tokens = tokenize(query)
        if not tokens or not self._ids:
            return []

        boost = boost or {}
        scores: Dict[int, float] = defaultdict(float)

        for token in tokens:
            derived = self.derive_terms(token, prefix, fuzzy)
            for field_name, model in self._models.items():
                field_boost = boost.get(field_name, 1.0)
                postings = self._postings[field_name]
                for term, weight in derived.items():
                    doc_ids = postings.get(term)
                    if not doc_ids:
                        continue
                    term_scores = model.get_batch_scores([term], doc_ids)
                    for doc_index, term_score in zip(doc_ids, term_scores):
                        scores[doc_index] += field_boost * weight * float(term_score)

        ranked = sorted(
            ((doc_index, score) for doc_index, score in scores.items() if score > 0),
            key=lambda item: (-item[1], item[0])
        )
        logger.debug(f"INDEX: '{query}' -> {len(ranked)} hits")
        return [SearchHit(id=self._ids[doc_index], score=score) for doc_index, score in ranked]
