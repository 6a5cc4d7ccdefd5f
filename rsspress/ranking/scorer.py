"""Importance scoring with a deterministic fallback."""

import asyncio
import random
from typing import AbstractSet, List, Optional, Sequence

from pydantic import BaseModel

from ..constants import DEFAULT_FEED_PENALTY
from ..errors import ScoringUnavailable
from ..logging_config import create_logger
from ..models import Article
from .llm_provider import ScoreProvider, clamp_score

logger = create_logger(__name__)

# Scoring constants for fallback algorithm
TITLE_SCORE_MULTIPLIER = 0.6
MAX_TITLE_SCORE = 60
IMAGE_BONUS = 40
RANDOM_VARIATION = 10


def fallback_importance(article: Article, rng: random.Random) -> int:
    """
    Rule-based importance: title length, image bonus and jitter.

    ``min(len(title) * 0.6, 60) + (40 if image) + uniform(-10, 10)``, clamped.
    """
    title_score = min(len(article.title) * TITLE_SCORE_MULTIPLIER, MAX_TITLE_SCORE)
    image_bonus = IMAGE_BONUS if article.has_image else 0
    variation = rng.uniform(-RANDOM_VARIATION, RANDOM_VARIATION)
    return clamp_score(title_score + image_bonus + variation)


def apply_default_feed_penalty(score: int, penalty: int = DEFAULT_FEED_PENALTY) -> int:
    return max(0, score - penalty)


class ScoringResult(BaseModel):
    """Scored copies of a batch and whether the rule-based fallback produced them."""

    articles: List[Article]
    used_fallback: bool = False


class ImportanceScorer:
    """Assign ``importance`` to a batch of articles."""

    def __init__(
        self,
        provider: Optional[ScoreProvider] = None,
        timeout: float = 10.0,
        default_feed_penalty: int = DEFAULT_FEED_PENALTY,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize importance scorer.

        Args:
            provider: Relevance model; None scores with the fallback only
            timeout: Seconds allowed for the relevance model call
            default_feed_penalty: Points removed from default-feed articles
            rng: Random source for the fallback jitter
        """
        self.provider = provider
        self.timeout = timeout
        self.default_feed_penalty = default_feed_penalty
        self.rng = rng or random.Random()

    async def _model_scores(self, articles: Sequence[Article], theme: str, locale: str) -> List[int]:
        if self.provider is None:
            raise ScoringUnavailable("No relevance model configured")

        try:
            scores = await asyncio.wait_for(
                self.provider.score_batch(articles, theme, locale),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ScoringUnavailable(f"Relevance model timed out after {self.timeout}s") from e

        if len(scores) != len(articles):
            raise ScoringUnavailable(f"Expected {len(articles)} scores, got {len(scores)}")
        return [clamp_score(score) for score in scores]

    async def score(
        self,
        articles: Sequence[Article],
        theme: str,
        locale: str = "en",
        default_feed_urls: AbstractSet[str] = frozenset(),
    ) -> ScoringResult:
        """
        Score articles; never raises.

        Returns copies of the articles with an integer ``importance``, and
        whether the fallback was used.
        Articles from ``default_feed_urls`` lose ``default_feed_penalty``
        points after clamping, floored at 0.
        """
        if not articles:
            return ScoringResult(articles=[])

        try:
            scores = await self._model_scores(articles, theme, locale)
            used_fallback = False
        except Exception as e:
            # Terminal safety net: any model failure degrades to the rule-based score
            logger.warning("Importance calculation falling back to rule-based scoring: %s", e)
            scores = [fallback_importance(article, self.rng) for article in articles]
            used_fallback = True

        scored: List[Article] = []
        for article, score in zip(articles, scores):
            importance = score
            if article.feed_source in default_feed_urls:
                importance = apply_default_feed_penalty(score, self.default_feed_penalty)
                logger.debug(
                    "Reduced score for default feed article: %s... (%d -> %d)",
                    article.title[:50],
                    score,
                    importance,
                )
            scored.append(article.model_copy(update={"importance": importance}))
        return ScoringResult(articles=scored, used_fallback=used_fallback)
