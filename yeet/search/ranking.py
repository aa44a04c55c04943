"""
Ranking - Order the catalog against the current query on every keystroke.

Two modes, picked per query:
  - Substring: if the query (2+ chars) appears literally in any app's
    "name + keywords" text, only those apps are candidates.
  - Fuzzy: otherwise every app is scored by the injected Scorer and
    weak matches are pruned by an absolute floor and a cutoff relative
    to the best score.

Prefix matches on the display name are pinned first when prefer_prefix
is enabled. Ties keep catalog order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple, Optional

from loguru import logger

from yeet.search.index import SearchIndex


class Scorer(ABC):
    """Fuzzy match capability used by rank()."""

    @abstractmethod
    def score(self, text: str, query: str) -> Optional[int]:
        """Return a match score, or None if text doesn't match at all."""
        ...


def _bool_setting(section: dict, key: str, default: bool) -> bool:
    """TOML booleans only; anything else (e.g. "false" quoted) keeps the default."""
    value = section.get(key, default)
    if isinstance(value, bool):
        return value
    logger.warning(f"Setting '{key}' must be true or false, got {value!r}; using {default}")
    return default


@dataclass(frozen=True)
class RankingConfig:
    """Knobs from the [general] and [search] settings sections."""
    initial_results: int = 8
    max_results: int = 10
    min_score: int = 50
    score_threshold: float = 0.6
    prefer_prefix: bool = True

    @classmethod
    def from_settings(cls, settings: dict) -> "RankingConfig":
        general = settings.get("general", {})
        search = settings.get("search", {})
        defaults = cls()
        return cls(
            initial_results=int(general.get("initial_results", defaults.initial_results)),
            max_results=int(general.get("max_results", defaults.max_results)),
            min_score=int(search.get("min_score", defaults.min_score)),
            score_threshold=float(search.get("score_threshold", defaults.score_threshold)),
            prefer_prefix=_bool_setting(search, "prefer_prefix", defaults.prefer_prefix),
        )


class _Candidate(NamedTuple):
    index: int
    score: int
    is_prefix: bool


def rank(
    index: SearchIndex,
    query: str,
    config: RankingConfig,
    scorer: Scorer,
) -> list[int]:
    """
    Rank catalog positions for a query.

    Args:
        index: Search index of the current catalog
        query: Raw text from the search entry
        config: Ranking settings
        scorer: Fuzzy scorer

    Returns:
        Catalog indices, best first, at most config.max_results long
    """
    query = query.strip()
    limit = max(config.max_results, 0)

    if not query:
        # Browse view: catalog order, favorites first
        count = min(max(config.initial_results, 0), limit, len(index))
        return list(range(count))

    query_len = len(query)
    query_lower = query.lower()

    substring_hits = []
    if query_len >= 2:
        substring_hits = [
            i for i, text in enumerate(index.texts_lower) if query_lower in text
        ]

    def is_prefix(i: int) -> bool:
        return config.prefer_prefix and index.names_lower[i].startswith(query_lower)

    if substring_hits:
        candidates = [
            _Candidate(i, scorer.score(index.texts[i], query) or 0, is_prefix(i))
            for i in substring_hits
        ]
    else:
        candidates = []
        for i, text in enumerate(index.texts):
            score = scorer.score(text, query)
            if score is not None:
                candidates.append(_Candidate(i, score, is_prefix(i)))

    # Stable: equal keys keep catalog order even with reverse=True
    candidates.sort(key=lambda c: (c.is_prefix, c.score), reverse=True)

    if query_len >= 2 and not substring_hits:
        candidates = [c for c in candidates if c.score >= config.min_score]

        if candidates:
            threshold = min(max(config.score_threshold, 0.0), 1.0)
            best_score = max(c.score for c in candidates)
            cutoff = int(best_score * threshold)
            candidates = [c for c in candidates if c.score >= cutoff]

    return [c.index for c in candidates[:limit]]
