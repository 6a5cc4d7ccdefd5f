"""Newspaper generation pipelines."""

from .factory import Components, build_score_provider
from .generator import GeneratedNewspaper, NewspaperGenerator, check_article_count, rank_by_importance
from .historical import HistoricalNewspaperService, merge_articles
from .retention import RetentionSweep, SweepResult
from .stages import PipelineStage, summarize_stages

__all__ = [
    "Components",
    "GeneratedNewspaper",
    "HistoricalNewspaperService",
    "NewspaperGenerator",
    "PipelineStage",
    "RetentionSweep",
    "SweepResult",
    "build_score_provider",
    "check_article_count",
    "merge_articles",
    "rank_by_importance",
    "summarize_stages",
]
