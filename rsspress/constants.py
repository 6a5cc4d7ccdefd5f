"""Shared constants for the curation pipeline."""

# All date-window arithmetic happens in one fixed timezone (UTC+9, no DST)
REFERENCE_TIMEZONE = "Asia/Tokyo"

# Ingestion
MIN_ARTICLES = 8
TARGET_ARTICLES_MIN = 8
TARGET_ARTICLES_MAX = 15
NEWSPAPER_WINDOWS = (3, 7)
HISTORICAL_WINDOWS = (7, 14)
HISTORICAL_EXTENSION_DAYS = 7
DESCRIPTION_MAX_CHARS = 200

# Generation fails below this many articles
MIN_ARTICLES_FOR_GENERATION = 3

# Scoring
DEFAULT_FEED_PENALTY = 30
MISSING_SCORE = 50

# Limiter
MAX_DEFAULT_ARTICLES_PER_FEED = 2

# Retention
RETENTION_DAYS = 7
MAX_BATCH_DELETE = 25

# Store keys
NEWSPAPER_PREFIX = "NEWSPAPER#"
DATE_PREFIX = "DATE#"
METADATA_SK = "METADATA"
CATEGORY_PUBLIC = "PUBLIC"
CATEGORY_HISTORICAL = "HISTORICAL"

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
