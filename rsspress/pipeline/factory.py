"""Build pipeline components from configuration."""

import random
from typing import Optional

from ..clock import Clock, reference_now
from ..config import Config
from ..db import NewspaperStore, PostgresNewspaperStore, close_connection_pools, create_store
from ..ingestion import DefaultFeedCatalog, IngestionWindow, RSSFetcher
from ..logging_config import create_logger
from ..ranking import ArticleLimiter, ImportanceScorer, MockScoreProvider, OpenAIScoreProvider, ScoreProvider
from .generator import NewspaperGenerator
from .historical import HistoricalNewspaperService
from .retention import RetentionSweep

logger = create_logger(__name__)


def build_score_provider(config: Config, rng: Optional[random.Random] = None) -> Optional[ScoreProvider]:
    """Configured relevance model, or None to score with the fallback only."""
    llm_config = config.get_llm_config()
    provider = llm_config.get("provider")

    if provider == "mock":
        return MockScoreProvider()
    if provider == "openai":
        api_key = llm_config.get("api_key")
        if not api_key:
            logger.warning("No OpenAI API key found, importance scoring will use the fallback")
            return None
        return OpenAIScoreProvider(
            api_key=api_key,
            model=llm_config.get("model", "gpt-4o-mini"),
            base_url=llm_config.get("base_url"),
            timeout=llm_config.get("timeout_seconds", 10.0),
            rng=rng,
        )

    logger.warning("Unknown LLM provider %r, importance scoring will use the fallback", provider)
    return None


class Components:
    """Shared wiring for the CLI commands."""

    def __init__(
        self,
        config: Config,
        store: Optional[NewspaperStore] = None,
        clock: Clock = reference_now,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        settings = config.config
        self.tz = settings.timezone
        self.clock = clock
        self.rng = rng or random.Random()
        self._store = store

        ingestion = settings.ingestion
        self.catalog = DefaultFeedCatalog(settings.default_feeds)
        self.fetcher = RSSFetcher(
            timeout=ingestion.fetch_timeout,
            max_concurrent=ingestion.max_concurrent,
            clock=clock,
        )
        self.window = IngestionWindow(
            self.fetcher,
            windows=ingestion.windows,
            historical_windows=ingestion.historical_windows,
            historical_extension_days=ingestion.historical_extension_days,
            min_articles=ingestion.min_articles,
            target_range=(ingestion.target_min, ingestion.target_max),
            rng=self.rng,
            clock=clock,
            tz=self.tz,
        )
        self.scorer = ImportanceScorer(
            provider=build_score_provider(config, self.rng),
            timeout=settings.llm.timeout_seconds,
            default_feed_penalty=settings.scoring.default_feed_penalty,
            rng=self.rng,
        )
        self.limiter = ArticleLimiter(
            max_per_default_feed=settings.limiter.max_default_articles_per_feed,
            min_article_count=settings.limiter.min_article_count,
        )

    @property
    def store(self) -> NewspaperStore:
        if self._store is None:
            self._store = create_store(self.config)
        return self._store

    def close(self) -> None:
        """Release pooled database connections."""
        if isinstance(self._store, PostgresNewspaperStore):
            close_connection_pools()

    def generator(self) -> NewspaperGenerator:
        return NewspaperGenerator(self.window, self.scorer, self.limiter, self.catalog)

    def historical(self) -> HistoricalNewspaperService:
        return HistoricalNewspaperService(
            self.store,
            self.window,
            self.scorer,
            self.limiter,
            catalog=self.catalog,
            max_age_days=self.config.config.retention.retention_days,
            clock=self.clock,
            tz=self.tz,
        )

    def retention_sweep(self) -> RetentionSweep:
        retention = self.config.config.retention
        return RetentionSweep(
            self.store,
            retention_days=retention.retention_days,
            batch_size=retention.batch_size,
            page_size=retention.page_size,
            clock=self.clock,
            tz=self.tz,
        )
