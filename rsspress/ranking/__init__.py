"""Importance scoring and article limiting."""

from .limiter import ArticleLimiter, count_articles_by_feed, group_by_feed
from .llm_provider import (
    MockScoreProvider,
    OpenAIScoreProvider,
    ScoreProvider,
    clamp_score,
    parse_scores,
)
from .prompts import build_importance_prompt, pick_perspective
from .scorer import ImportanceScorer, ScoringResult, apply_default_feed_penalty, fallback_importance

__all__ = [
    "ArticleLimiter",
    "ImportanceScorer",
    "MockScoreProvider",
    "OpenAIScoreProvider",
    "ScoreProvider",
    "ScoringResult",
    "apply_default_feed_penalty",
    "build_importance_prompt",
    "clamp_score",
    "count_articles_by_feed",
    "fallback_importance",
    "group_by_feed",
    "parse_scores",
    "pick_perspective",
]
