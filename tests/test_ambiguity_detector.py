"""
Tests for AmbiguityDetector - near-tie detection and clarifier prompts.
"""

import pytest

from services.ambiguity_detector import (
    CLARIFIER_PROMPT,
    AmbiguityDetector,
    ClarifierOption,
    ClarifierPrompt,
)
from services.ranker import RankedResult


@pytest.fixture
def detector():
    return AmbiguityDetector(ratio_threshold=0.88)


@pytest.fixture
def results(entry_factory):
    def _build(*scores):
        return [
            RankedResult(entry=entry_factory(f"e{i}", name=f"Entry {i}"), score=score)
            for i, score in enumerate(scores)
        ]
    return _build


class TestScoreRatio:
    def test_ratio(self, detector, results):
        assert detector.score_ratio(results(100.0, 50.0)) == pytest.approx(0.5)

    def test_single_result(self, detector, results):
        assert detector.score_ratio(results(100.0)) is None

    def test_zero_top_score(self, detector, results):
        assert detector.score_ratio(results(0.0, 0.0)) is None

    def test_missing_scores(self, detector, results):
        assert detector.score_ratio(results(None, None)) is None

    def test_non_finite(self, detector, results):
        assert detector.score_ratio(results(1e-320, 1e300)) is None


class TestDetect:
    def test_boundary_not_ambiguous(self, detector, results):
        # ratio exactly 0.88 -> strict > required
        assert detector.detect("permit", results(100.0, 88.0)) is None

    def test_just_above_boundary(self, detector, results):
        prompt = detector.detect("permit", results(100.0, 88.01))
        assert isinstance(prompt, ClarifierPrompt)
        assert len(prompt.options) == 2

    def test_options_follow_rank_order(self, detector, results):
        prompt = detector.detect("  permit ", results(10.0, 9.9, 9.8))
        assert prompt.prompt == CLARIFIER_PROMPT
        assert prompt.options == (
            ClarifierOption(label="Entry 0", query="permit Entry 0"),
            ClarifierOption(label="Entry 1", query="permit Entry 1"),
        )

    def test_clear_winner(self, detector, results):
        assert detector.detect("permit", results(10.0, 2.0)) is None

    def test_fewer_than_two_results(self, detector, results):
        assert detector.detect("permit", results(10.0)) is None
        assert detector.detect("permit", []) is None

    def test_zero_scores_not_ambiguous(self, detector, results):
        assert detector.detect("permit", results(0.0, 0.0)) is None

    def test_configurable_threshold(self, results):
        strict = AmbiguityDetector(ratio_threshold=0.99)
        assert strict.detect("permit", results(100.0, 95.0)) is None
        loose = AmbiguityDetector(ratio_threshold=0.5)
        assert loose.detect("permit", results(100.0, 60.0)) is not None
