"""
Fuzzy Scorer - rapidfuzz-backed typo-tolerant matching.

Uses weighted ratio (WRatio) on lowercased, punctuation-stripped text so
"firefx" still finds "Firefox". Scores are 0-100.
"""

from typing import Optional

from rapidfuzz import fuzz, utils

from yeet.search.ranking import Scorer


class RapidFuzzScorer(Scorer):
    """Score app texts against a query with rapidfuzz WRatio."""

    def __init__(self, scorer=fuzz.WRatio):
        self._scorer = scorer

    def score(self, text: str, query: str) -> Optional[int]:
        score = self._scorer(query, text, processor=utils.default_process)
        if score <= 0:
            return None
        return int(round(score))
