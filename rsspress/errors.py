"""Exception taxonomy for the curation pipeline."""

from typing import Optional


class RSSPressError(Exception):
    """Base class for all rsspress errors."""


class FetchError(RSSPressError):
    """A single feed could not be fetched or parsed.

    Non-fatal: the ingestion window logs it and carries on with the
    remaining feeds.
    """

    def __init__(self, url: str, cause: Optional[BaseException] = None, message: Optional[str] = None) -> None:
        self.url = url
        self.cause = cause
        detail = message or (f"{type(cause).__name__}: {cause}" if cause else "unknown error")
        super().__init__(f"Failed to fetch feed {url}: {detail}")


class InsufficientArticles(RSSPressError):
    """Not enough articles to assemble a newspaper. Nothing is persisted."""

    reason = "INSUFFICIENT_ARTICLES"

    def __init__(self, count: int, minimum: int) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(self._message())

    def _message(self) -> str:
        return f"Only {self.count} articles found (minimum: {self.minimum})"


class NoArticlesFound(InsufficientArticles):
    """No feed produced any article; feeds are likely unreachable."""

    reason = "NO_ARTICLES"

    def _message(self) -> str:
        return "No articles found. The feeds may be unreachable; check the feed URLs or try again later."


class TooFewArticles(InsufficientArticles):
    """Feeds answered but produced too few articles for the window."""

    reason = "TOO_FEW_ARTICLES"

    def _message(self) -> str:
        return (
            f"Only {self.count} articles found (minimum: {self.minimum}). "
            "Try a different date or add more RSS feeds."
        )


class DateValidationError(RSSPressError):
    """A requested newspaper date is not servable."""

    reason = "INVALID_DATE"

    def __init__(self, date: str, message: str) -> None:
        self.date = date
        super().__init__(message)


class InvalidDate(DateValidationError):
    reason = "INVALID_DATE"


class FutureDate(DateValidationError):
    reason = "FUTURE_DATE"


class DateTooOld(DateValidationError):
    reason = "DATE_TOO_OLD"


class ScoringUnavailable(RSSPressError):
    """The relevance model could not produce scores. Always absorbed by the fallback."""


class StorageError(RSSPressError):
    """The newspaper store failed."""
