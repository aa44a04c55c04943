"""
Search package - Incremental ranking of the application catalog.

Provides the search index, the two-mode ranking policy, the default
rapidfuzz scorer and the app search handler used by the window.
"""

from .index import SearchIndex
from .ranking import RankingConfig, Scorer, rank
from .fuzzy import RapidFuzzScorer
from .app_search import AppSearchHandler, ResultItem

__all__ = [
    "AppSearchHandler",
    "RankingConfig",
    "RapidFuzzScorer",
    "ResultItem",
    "Scorer",
    "SearchIndex",
    "rank",
]
