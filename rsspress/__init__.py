"""rsspress - personalized RSS newspaper curation pipeline."""

__version__ = "0.1.0"
