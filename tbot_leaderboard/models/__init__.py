from .transfer import TransferRecord, parse_transfer_page, raw_page_size
from .reputation import (
    ReputationEntry,
    TokenReputation,
    TitleReputation,
    CatalogueReputation,
    OwnerReputation,
    FlatReputation,
    SingleTokenReputation,
    ReputationPayload,
    ReputationMap,
    normalize_title,
    parse_reputation_payload,
)
from .leaderboard import LeaderboardEntry, LeaderboardResponse, TokenContribution
from .query import LeaderboardQuery

__all__ = [
    "TransferRecord",
    "parse_transfer_page",
    "raw_page_size",
    "ReputationEntry",
    "TokenReputation",
    "TitleReputation",
    "CatalogueReputation",
    "OwnerReputation",
    "FlatReputation",
    "SingleTokenReputation",
    "ReputationPayload",
    "ReputationMap",
    "normalize_title",
    "parse_reputation_payload",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "TokenContribution",
    "LeaderboardQuery",
]
