"""
Tests for QueryExpander - intent synonym expansion.
"""

import pytest

from services.intents import DEFAULT_INTENTS
from services.query_expander import QueryExpander

PAY_BILL = DEFAULT_INTENTS[0]


@pytest.fixture
def expander():
    return QueryExpander()


class TestExpand:
    def test_no_intent_returns_trimmed(self, expander):
        assert expander.expand("  water  ", None) == "water"

    def test_appends_missing_terms(self, expander):
        assert expander.expand("water bill", PAY_BILL) == "water bill pay bill billing payment"

    def test_original_preserved(self, expander):
        assert expander.expand("Water Bill", PAY_BILL).startswith("Water Bill")

    def test_case_insensitive_containment(self, expander):
        assert expander.expand("Pay Bill", PAY_BILL) == "Pay Bill billing payment"

    def test_idempotent_when_all_terms_present(self, expander):
        query = "pay bill billing payment"
        assert expander.expand(query, PAY_BILL) == query

    def test_expanding_twice_is_stable(self, expander):
        once = expander.expand("water", PAY_BILL)
        assert expander.expand(once, PAY_BILL) == once

    def test_empty_query(self, expander):
        assert expander.expand("", PAY_BILL) == "pay bill billing payment"

    def test_none_query(self, expander):
        assert expander.expand(None, None) == ""


class TestMissingTerms:
    def test_substring_counts_as_present(self, expander):
        # "billing" contains "bill" but the expansion term is "pay bill"
        assert expander.missing_terms("billing", PAY_BILL) == ["pay bill", "payment"]
