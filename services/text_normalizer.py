"""
Text Normalizer - tokenization and tag vocabulary.
Version: 1.0

Single case convention for the whole pipeline: plain str.lower(), applied
once, no locale-aware folding.
"""

import re
from typing import Iterable, List, Optional, Tuple

from models import Entry

# Anything that is not a lowercase letter, digit or whitespace is a separator
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into lowercase alphanumeric tokens.

    Example:
        tokenize("Pay Water-Bill!") -> ["pay", "water", "bill"]
    """
    if not text:
        return []
    cleaned = _NON_ALNUM.sub(" ", str(text).lower())
    return [token for token in cleaned.split() if token]


def build_tag_vocabulary(entries: Iterable[Entry]) -> Tuple[str, ...]:
    """All distinct lowercase tags across entries, first-seen order."""
    seen = {}
    for entry in entries:
        for tag in entry.tags:
            seen.setdefault(str(tag).lower(), None)
    return tuple(seen)


def matched_on(entry: Entry, query: str, limit: int = 4) -> Tuple[str, ...]:
    """
    Explain why an entry matched: query tokens found in its tags, name or
    summary, in that order, de-duplicated.
    """
    query_tokens = set(tokenize(query))
    if not query_tokens:
        return ()

    tag_hits = [tag for tag in entry.tags if tag in query_tokens]
    name_hits = [t for t in tokenize(entry.name) if t in query_tokens]
    summary_hits = [t for t in tokenize(entry.summary) if t in query_tokens]

    combined = list(dict.fromkeys(tag_hits + name_hits + summary_hits))
    return tuple(combined[:limit])
