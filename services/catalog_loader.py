"""
Catalog Loader
Version: 1.0

Reads the catalog snapshot and normalizes raw records into Entry models.
NO DEPENDENCIES on other services.

Accepted payloads:
- {"entries": [...]}  (canonical)
- [...]               (bare list of records)

Sources:
- local file path
- http(s):// URL (fetched with httpx)

Bad records are skipped with a warning. A failed load raises
CatalogLoadError; the search pipeline is never built on a partial catalog.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from config import get_settings
from models import Entry

logger = logging.getLogger(__name__)


# ---
# EXCEPTIONS
# ---

class CatalogError(Exception):
    """Base exception for catalog errors."""
    pass


class CatalogLoadError(CatalogError):
    """Raised when the catalog snapshot cannot be read or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load catalog from {source}: {reason}")


# ---
# NORMALIZATION
# ---

def normalize_entry(raw: Dict[str, Any]) -> Entry:
    """
    Validate one raw record into an Entry.

    Raises:
        pydantic.ValidationError: record has no usable id
    """
    return Entry.model_validate(raw)


def normalize_entries(records: List[Any]) -> Tuple[Entry, ...]:
    """Normalize records, skipping invalid ones and duplicate ids."""
    entries: List[Entry] = []
    seen_ids = set()

    for position, raw in enumerate(records):
        if not isinstance(raw, dict):
            logger.warning(f"CATALOG: skipping record #{position}: not an object")
            continue
        try:
            entry = normalize_entry(raw)
        except ValidationError as e:
            logger.warning(f"CATALOG: skipping record #{position}: {e.errors()[0].get('msg')}")
            continue

        if entry.id in seen_ids:
            logger.warning(f"CATALOG: duplicate id '{entry.id}' at record #{position}, keeping first")
            continue

        seen_ids.add(entry.id)
        entries.append(entry)

    return tuple(entries)


def parse_catalog(payload: Any, source: str = "<memory>") -> Tuple[Entry, ...]:
    """
    Normalize a decoded catalog payload.

    Raises:
        CatalogLoadError: payload is neither {"entries": [...]} nor a list
    """
    if isinstance(payload, dict):
        records = payload.get("entries") or []
    elif isinstance(payload, list):
        records = payload
    else:
        raise CatalogLoadError(source, f"unexpected payload type {type(payload).__name__}")

    if not isinstance(records, list):
        raise CatalogLoadError(source, "'entries' must be a list")

    entries = normalize_entries(records)
    logger.info(f"CATALOG: loaded {len(entries)} entries from {source} ({len(records)} records)")
    return entries


# ---
# SOURCES
# ---

def is_remote_source(source: Union[str, Path]) -> bool:
    """True for http(s) catalog URLs."""
    return str(source).startswith(("http://", "https://"))


def _read_file(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise CatalogLoadError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(str(path), f"invalid JSON: {e}") from e


def _fetch_url(url: str, timeout: float) -> Any:
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        raise CatalogLoadError(url, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise CatalogLoadError(url, str(e)) from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(url, f"invalid JSON: {e}") from e


def load_catalog(
    source: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None
) -> Tuple[Entry, ...]:
    """
    Load and normalize the catalog snapshot.

    Args:
        source: File path or http(s) URL; defaults to CATALOG_SOURCE
        timeout: HTTP timeout in seconds; defaults to CATALOG_TIMEOUT_SECONDS

    Returns:
        Entries in catalog order

    Raises:
        CatalogLoadError: on any I/O, HTTP, JSON or shape error
    """
    settings = get_settings()
    source = source if source is not None else settings.CATALOG_SOURCE
    timeout = timeout if timeout is not None else settings.CATALOG_TIMEOUT_SECONDS

    source_str = str(source)
    if is_remote_source(source_str):
        payload = _fetch_url(source_str, timeout)
    else:
        payload = _read_file(Path(source_str))

    return parse_catalog(payload, source_str)
