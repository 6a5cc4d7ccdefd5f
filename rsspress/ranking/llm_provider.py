"""Relevance model interface and implementations."""

import json
import math
import random
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from ..constants import MISSING_SCORE
from ..errors import ScoringUnavailable
from ..logging_config import create_logger
from ..models import Article
from .prompts import build_importance_prompt, pick_perspective

logger = create_logger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def clamp_score(value: float) -> int:
    """Round to an integer in [0, 100]."""
    return max(0, min(100, int(round(value))))


def parse_scores(content: str, expected: int) -> List[int]:
    """
    Parse a ``{"scores": [...]}`` reply positionally aligned with the batch.

    Missing or non-numeric entries become 50; every value is clamped to
    [0, 100].

    Raises:
        ScoringUnavailable: when no JSON object with a ``scores`` list is found
    """
    match = _JSON_OBJECT.search(content or "")
    if not match:
        raise ScoringUnavailable("No JSON found in response")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ScoringUnavailable(f"Malformed JSON in response: {e}") from e

    raw_scores = parsed.get("scores") if isinstance(parsed, dict) else None
    if not isinstance(raw_scores, list):
        raise ScoringUnavailable("Response has no 'scores' list")

    scores: List[int] = []
    for index in range(expected):
        value = raw_scores[index] if index < len(raw_scores) else None
        scores.append(_coerce_score(value))
    return scores


def _coerce_score(value) -> int:
    if isinstance(value, bool) or value is None:
        return MISSING_SCORE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MISSING_SCORE
    if math.isnan(number):
        return MISSING_SCORE
    if math.isinf(number):
        return 100 if number > 0 else 0
    return clamp_score(number)


class ScoreProvider(ABC):
    """Abstract relevance model: one call scores a whole batch."""

    @abstractmethod
    async def score_batch(
        self,
        articles: Sequence[Article],
        theme: str,
        locale: str = "en",
    ) -> List[int]:
        """
        Score articles for a theme.

        Args:
            articles: Batch to score
            theme: Reader's theme
            locale: Prompt language (en, ja)

        Returns:
            One score per article, in input order

        Raises:
            ScoringUnavailable: if the model cannot produce scores
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class OpenAIScoreProvider(ScoreProvider):
    """OpenAI chat-completions implementation of the relevance model."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL (for testing or a gateway)
            timeout: Request timeout in seconds
            rng: Random source for perspective phrasing
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        self.model = model
        self.rng = rng or random.Random()
        self.total_tokens = 0
        self.api_calls = 0

    async def score_batch(
        self,
        articles: Sequence[Article],
        theme: str,
        locale: str = "en",
    ) -> List[int]:
        """Score a batch with a single chat completion."""
        prompt = build_importance_prompt(
            articles,
            theme,
            locale=locale,
            perspective=pick_perspective(self.rng, locale),
            timestamp=datetime.now(),
        )

        try:
            self.api_calls += 1
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.8,  # variation between repeated requests
                max_tokens=1024,
            )
        except Exception as e:
            raise ScoringUnavailable(f"Relevance model call failed: {e}") from e

        # Update usage stats
        if response.usage:
            self.total_tokens += response.usage.total_tokens

        if not response.choices or not response.choices[0].message.content:
            raise ScoringUnavailable("Empty response from relevance model")

        return parse_scores(response.choices[0].message.content, len(articles))

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.model,
        }


class MockScoreProvider(ScoreProvider):
    """Mock relevance model for tests and offline runs."""

    def __init__(self, scores: Optional[List] = None, reply: Optional[str] = None) -> None:
        """
        Initialize mock provider.

        Args:
            scores: Raw score values to return (parsed like a model reply)
            reply: Raw reply text; takes precedence over ``scores``
        """
        self.scores = scores
        self.reply = reply
        self.calls = []

    async def score_batch(
        self,
        articles: Sequence[Article],
        theme: str,
        locale: str = "en",
    ) -> List[int]:
        """Mock scoring: explicit reply, explicit scores, or a descending ramp."""
        self.calls.append((theme, locale, len(articles)))

        if self.reply is not None:
            return parse_scores(self.reply, len(articles))

        scores = self.scores
        if scores is None:
            scores = [max(0, 90 - 5 * i) for i in range(len(articles))]
        return parse_scores(json.dumps({"scores": scores}), len(articles))

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {
            "total_tokens": 0,
            "api_calls": len(self.calls),
            "model": "mock",
        }
