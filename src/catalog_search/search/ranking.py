"""
Static Ranking

Query-independent importance score for indexable content, computed once at
build time and persisted in the search index.
"""

import math
from dataclasses import dataclass, field

from catalog_search.analyzer import SearchAnalyzer, analyzer as default_analyzer


@dataclass
class RankingConfig:
    """Ranking weights."""

    token_weight: float = 1.0  # Per distinct meaningful token
    length_weight: float = 0.5  # Per log-unit of raw word count
    keyword_boosts: dict[str, float] = field(default_factory=dict)  # Extra weight per token
    precision: int = 4  # Decimal places kept in the persisted score


class Ranker:
    """
    Static ranking implementation.

    rank(text) = token_weight * |T| + Σ boost(t) for t in T + length_weight * log(1 + W)

    Where:
    - T = distinct search tokens of the text
    - boost(t) = configured keyword boost (0 when absent)
    - W = number of whitespace-separated words

    Every term is non-negative and grows with the text, so adding indexable
    content never lowers the rank.
    """

    def __init__(
        self,
        config: RankingConfig | None = None,
        analyzer: SearchAnalyzer | None = None,
    ):
        self.config = config or RankingConfig()
        self.analyzer = analyzer or default_analyzer

    def rank(self, text: str) -> float:
        """
        Calculate the static rank of a document.

        Args:
            text: Full indexable text (title, tags, language, body, excerpt)

        Returns:
            Non-negative score (higher is more important)
        """
        if not text or not text.strip():
            return 0.0

        tokens = self.analyzer.tokenize(text)
        word_count = len(text.split())

        score = self.config.token_weight * len(tokens)
        for token in tokens:
            score += max(self.config.keyword_boosts.get(token, 0.0), 0.0)
        score += self.config.length_weight * math.log1p(word_count)

        return round(score, self.config.precision)
