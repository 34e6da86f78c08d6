"""Tests for services/edit_distance.py."""

import pytest

from services.edit_distance import levenshtein


class TestLevenshtein:
    @pytest.mark.parametrize("a,b,expected", [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("abc", "abc", 0),
        ("", "", 0),
        ("pothole", "pothle", 1),
        ("flaw", "lawn", 2),
    ])
    def test_known_distances(self, a, b, expected):
        assert levenshtein(a, b) == expected

    def test_symmetric(self):
        assert levenshtein("trash", "tarsh") == levenshtein("tarsh", "trash")

    def test_non_string_inputs(self):
        assert levenshtein(123, 124) == 1
