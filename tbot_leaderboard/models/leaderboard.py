"""Leaderboard models for API responses."""

from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict


class TokenContribution(BaseModel):
    """An item that contributed positive reputation to a wallet."""
    title: str
    rep: float


class LeaderboardEntry(BaseModel):
    """
    A single entry in the leaderboard.
    """
    model_config = ConfigDict(populate_by_name=True)

    wallet: str
    total: float = Field(description="Sum of matched reputation for this sender")
    tokens: Optional[list[TokenContribution]] = Field(
        default=None, description="Contributing items, only in enriched mode"
    )


class LeaderboardResponse(BaseModel):
    """
    Leaderboard response body.

    debug is a development aid and its contents are not a stable contract.
    """
    leaderboard: list[LeaderboardEntry]
    debug: Optional[dict[str, Any]] = None
