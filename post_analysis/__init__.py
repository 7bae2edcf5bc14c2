"""Entity and sentiment analysis of scraped social media posts."""

__version__ = "1.0.0"
