"""Command-line interface for rsspress."""
