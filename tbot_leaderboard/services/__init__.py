from .params import resolve_leaderboard_query
from .transfer_service import TransferService
from .reputation_service import ReputationService
from .leaderboard_service import LeaderboardService, MatchMode

__all__ = [
    "resolve_leaderboard_query",
    "TransferService",
    "ReputationService",
    "LeaderboardService",
    "MatchMode",
]
