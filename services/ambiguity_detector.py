"""
Ambiguity Detector - near-tie detection on the top two results.
Version: 1.0

When the second result scores almost as high as the first, the query is
"ambiguous" and the user gets a clarifying choice between the two.

Rule:
- needs at least two results
- ratio = second.score / first.score
- ratio > threshold (strict) -> clarifier with exactly two options
- zero/missing top score or non-finite ratio -> not ambiguous
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from services.ranker import RankedResult

logger = logging.getLogger(__name__)

CLARIFIER_PROMPT = "Quick question - did you mean:"


@dataclass(frozen=True)
class ClarifierOption:
    """One selectable option: label shown, query run when picked."""
    label: str
    query: str


@dataclass(frozen=True)
class ClarifierPrompt:
    """Clarifying question with exactly two options."""
    prompt: str
    options: Tuple[ClarifierOption, ClarifierOption]


class AmbiguityDetector:
    """Decides whether the top two results need a clarifier."""

    def __init__(self, ratio_threshold: float = 0.88):
        """
        Args:
            ratio_threshold: second/first ratio above which results are ambiguous
        """
        self.ratio_threshold = ratio_threshold

    def score_ratio(self, results: Sequence[RankedResult]) -> Optional[float]:
        """second/first score ratio, or None if undefined."""
        if len(results) < 2:
            return None

        first = results[0].score
        second = results[1].score
        if first is None or second is None or first == 0:
            return None

        ratio = second / first
        if not math.isfinite(ratio):
            return None
        return ratio

    def detect(
        self,
        raw_query: str,
        results: Sequence[RankedResult]
    ) -> Optional[ClarifierPrompt]:
        """
        Build a clarifier for near-tied top results.

        Returns:
            ClarifierPrompt, or None (caller clears any previous prompt)
        """
        ratio = self.score_ratio(results)
        if ratio is None or ratio <= self.ratio_threshold:
            return None

        query = (raw_query or "").strip()
        top, runner_up = results[0].entry, results[1].entry

        logger.info(
            f"AMBIGUITY DETECTED: ratio={ratio:.3f} "
            f"top='{top.name}' runner_up='{runner_up.name}'"
        )

        return ClarifierPrompt(
            prompt=CLARIFIER_PROMPT,
            options=(
                ClarifierOption(label=top.name, query=f"{query} {top.name}"),
                ClarifierOption(label=runner_up.name, query=f"{query} {runner_up.name}"),
            ),
        )
