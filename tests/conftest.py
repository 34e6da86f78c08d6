"""
Shared pytest fixtures for the directory search tests.

Usage:
    def test_example(settings, catalog_entries, search_context):
        ...
"""

from pathlib import Path
from typing import List, Tuple

import pytest

from config import Settings
from models import Entry
from services.catalog_loader import load_catalog
from services.search_pipeline import SearchContext

CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


def make_entry(entry_id: str, **fields) -> Entry:
    """Build a validated Entry with sensible defaults."""
    data = {"id": entry_id, "name": fields.pop("name", entry_id.title())}
    data.update(fields)
    return Entry.model_validate(data)


# ---
# CORE FIXTURES
# ---


@pytest.fixture
def entry_factory():
    """Provide make_entry for building ad-hoc entries."""
    return make_entry


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def catalog_entries() -> Tuple[Entry, ...]:
    """The bundled sample catalog (10 entries)."""
    return load_catalog(CATALOG_PATH, timeout=1.0)


@pytest.fixture
def search_context(catalog_entries, settings) -> SearchContext:
    return SearchContext.build(catalog_entries, settings)


# ---
# TEST DATA FIXTURES
# ---


@pytest.fixture
def sample_entries() -> List[Entry]:
    """Small hand-made catalog for ranking tests."""
    return [
        make_entry(
            "water",
            name="Water Utility Billing",
            org="Water Works",
            summary="Pay your water bill online",
            tags=["water", "bill", "pay"],
            priority=80,
        ),
        make_entry(
            "pothole",
            name="Report a Pothole",
            summary="Report potholes on city streets",
            tags=["pothole", "street", "report"],
        ),
        make_entry(
            "permits",
            name="Building Permits",
            summary="Apply for building permits",
            tags=["permit", "building"],
            priority=40,
        ),
    ]
