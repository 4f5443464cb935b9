"""Reputation leaderboards over dialog-tbot transfer history."""

__version__ = "1.0.0"
