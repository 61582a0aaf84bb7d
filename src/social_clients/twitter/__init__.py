"""Twitter API client built on tweepy."""

from .client import TwitterClient

__all__ = ["TwitterClient"]
