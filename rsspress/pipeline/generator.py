"""Live newspaper generation: fetch, score, limit, detect languages."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..constants import MIN_ARTICLES_FOR_GENERATION
from ..errors import NoArticlesFound, TooFewArticles
from ..ingestion import DefaultFeedCatalog, IngestionWindow
from ..language import detect_languages
from ..logging_config import create_logger
from ..models import Article, Locale
from ..ranking import ArticleLimiter, ImportanceScorer
from .stages import PipelineStage, summarize_stages

logger = create_logger(__name__)


def check_article_count(count: int, minimum: int = MIN_ARTICLES_FOR_GENERATION) -> None:
    """Raise the matching InsufficientArticles subclass when ``count`` is too low."""
    if count == 0:
        raise NoArticlesFound(count, minimum)
    if count < minimum:
        raise TooFewArticles(count, minimum)


def rank_by_importance(articles: List[Article], limit: Optional[int] = None) -> List[Article]:
    """Stable sort by importance, highest first."""
    ranked = sorted(articles, key=lambda a: a.importance or 0, reverse=True)
    return ranked[:limit] if limit is not None else ranked


class GeneratedNewspaper(BaseModel):
    """Output of a live generation."""

    articles: List[Article] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    stats: Dict[str, Dict] = Field(default_factory=dict, description="Per-stage timings and counts")
    used_fallback: bool = Field(False, description="Whether rule-based scoring was used")


class NewspaperGenerator:
    """Generates a newspaper from the latest articles of a feed set."""

    def __init__(
        self,
        window: IngestionWindow,
        scorer: ImportanceScorer,
        limiter: ArticleLimiter,
        catalog: Optional[DefaultFeedCatalog] = None,
    ) -> None:
        self.window = window
        self.scorer = scorer
        self.limiter = limiter
        self.catalog = catalog or DefaultFeedCatalog()

    async def generate(self, feed_urls: List[str], theme: str, locale: Locale = "en") -> GeneratedNewspaper:
        """
        Run the live pipeline.

        Raises:
            NoArticlesFound: No feed produced an article
            TooFewArticles: Fewer than three articles were found
        """
        fetch = PipelineStage("fetch", "Fetching feeds")
        scoring = PipelineStage("scoring", "Scoring article importance")
        limiting = PipelineStage("limiting", "Limiting default feeds")
        stages = [fetch, scoring, limiting]

        fetch.start()
        ingestion = await self.window.fetch_for_newspaper(feed_urls, theme)
        fetch.complete(
            {
                "articles": len(ingestion.articles),
                "window_days": ingestion.window_days,
                "successful_feeds": ingestion.successful_feeds,
                "failed_feeds": ingestion.failed_feeds,
            }
        )

        try:
            check_article_count(len(ingestion.articles))
        except (NoArticlesFound, TooFewArticles) as e:
            fetch.fail(str(e))
            raise

        scoring.start()
        default_urls = self.catalog.default_urls()
        scoring_result = await self.scorer.score(ingestion.articles, theme, locale, default_urls)
        scored = scoring_result.articles
        usage = self.scorer.provider.get_usage_stats() if self.scorer.provider else {}
        scoring.complete({"fallback": scoring_result.used_fallback, "usage": usage})

        limiting.start()
        limited = self.limiter.limit(scored, self.catalog.feed_metadata(feed_urls, locale))
        limiting.complete({"before": len(scored), "after": len(limited)})

        languages = detect_languages(limited, ingestion.feed_languages)
        logger.info("Generated newspaper for %r: %d articles, languages %s", theme, len(limited), languages)
        return GeneratedNewspaper(
            articles=limited,
            languages=languages,
            stats=summarize_stages(stages),
            used_fallback=scoring_result.used_fallback,
        )
