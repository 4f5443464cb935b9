"""Resolved request parameters for the leaderboard pipeline."""

from typing import Optional
from pydantic import BaseModel, Field


class LeaderboardQuery(BaseModel):
    """Leaderboard request after defaults and parsing have been applied."""

    wallet_id: str
    limit: int = Field(gt=0, description="Page size for the history API")
    skip: int = Field(ge=0, description="Starting offset")
    start_nano: Optional[int] = Field(default=None, description="Inclusive lower bound, ns")
    end_nano: Optional[int] = Field(default=None, description="Inclusive upper bound, ns")
    debug: bool = False
    with_tokens: bool = False

    @property
    def has_time_range(self) -> bool:
        return self.start_nano is not None or self.end_nano is not None
