"""
Tests for services/search_index.py - BM25+ index with prefix/fuzzy terms.
"""

import pytest

from services.search_index import (
    CatalogSearchIndex,
    SearchHit,
    field_text,
    fuzzy_distance_for,
)


@pytest.fixture
def index(sample_entries):
    return CatalogSearchIndex(sample_entries)


class TestFuzzyDistance:
    @pytest.mark.parametrize("token,fuzzy,expected", [
        ("perm", 0.2, 1),
        ("ab", 0.2, 0),
        ("pothole", 0.2, 1),
        ("water", 0.0, 0),
        ("a" * 40, 0.5, 6),
    ])
    def test_distance(self, token, fuzzy, expected):
        assert fuzzy_distance_for(token, fuzzy) == expected


class TestFieldText:
    def test_tags_joined(self, entry_factory):
        assert field_text(entry_factory("a", tags=["x", "y"]), "tags") == "x y"

    def test_plain_field(self, entry_factory):
        assert field_text(entry_factory("a", org="Works"), "org") == "Works"


class TestSearch:
    def test_exact_match_ranks_entry_first(self, index):
        hits = index.search("water", boost={}, prefix=False, fuzzy=0.0)
        assert hits[0].id == "water"
        assert all(isinstance(h, SearchHit) for h in hits)

    def test_empty_query(self, index):
        assert index.search("", boost={}, prefix=True, fuzzy=0.2) == []
        assert index.search("!!!", boost={}, prefix=True, fuzzy=0.2) == []

    def test_empty_catalog(self):
        empty = CatalogSearchIndex([])
        assert empty.size == 0
        assert empty.search("water", boost={}, prefix=True, fuzzy=0.2) == []

    def test_prefix_matching(self, index):
        assert [h.id for h in index.search("perm", boost={}, prefix=True, fuzzy=0.0)] == ["permits"]
        assert index.search("perm", boost={}, prefix=False, fuzzy=0.0) == []

    def test_fuzzy_matching(self, index):
        assert [h.id for h in index.search("pothle", boost={}, prefix=False, fuzzy=0.2)] == ["pothole"]
        assert index.search("pothle", boost={}, prefix=False, fuzzy=0.0) == []

    def test_unmatched_terms_score_nothing(self, index):
        assert index.search("zzzzzz", boost={}, prefix=True, fuzzy=0.2) == []

    def test_hits_sorted_descending(self, index):
        hits = index.search("report water permit", boost={}, prefix=True, fuzzy=0.2)
        scores = [h.score for h in hits]
        assert scores == sorted(scores, reverse=True)
        assert all(s > 0 for s in scores)

    def test_field_boost_changes_order(self, entry_factory):
        entries = [
            entry_factory("by-name", name="Permit Office", tags=["desk"]),
            entry_factory("by-tag", name="Fence Desk", tags=["permit"]),
        ]
        index = CatalogSearchIndex(entries)

        name_heavy = index.search("permit", boost={"name": 10.0, "tags": 1.0}, prefix=False, fuzzy=0.0)
        tag_heavy = index.search("permit", boost={"name": 1.0, "tags": 10.0}, prefix=False, fuzzy=0.0)

        assert name_heavy[0].id == "by-name"
        assert tag_heavy[0].id == "by-tag"

    def test_exact_beats_prefix(self, entry_factory):
        entries = [
            entry_factory("exact", name="Park"),
            entry_factory("prefix", name="Parking"),
        ]
        hits = CatalogSearchIndex(entries).search("park", boost={}, prefix=True, fuzzy=0.0)
        assert [h.id for h in hits] == ["exact", "prefix"]


class TestDeriveTerms:
    def test_exact_weight(self, index):
        assert index.derive_terms("water", prefix=True, fuzzy=0.2)["water"] == 1.0

    def test_prefix_weight_below_exact(self, index):
        derived = index.derive_terms("perm", prefix=True, fuzzy=0.0)
        assert 0 < derived["permit"] < 1.0
        assert "perm" not in derived

    def test_vocabulary_sorted(self, index):
        assert list(index.vocabulary) == sorted(index.vocabulary)
