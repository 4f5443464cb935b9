"""Leaderboard service for ranking senders by received reputation."""

from enum import Enum
from typing import Optional
import logging

from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DataSource
from tbot_leaderboard.models import (
    LeaderboardEntry,
    LeaderboardQuery,
    LeaderboardResponse,
    ReputationMap,
    TokenContribution,
    TransferRecord,
    normalize_title,
)
from .reputation_service import ReputationService
from .transfer_service import TransferService

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    """How transfers are joined against reputation."""
    TOKEN_ID = "token_id"
    TITLE = "title"


def build_leaderboard(
    transfers: list[TransferRecord],
    reputation: ReputationMap,
    with_tokens: bool = False,
) -> list[LeaderboardEntry]:
    """
    Sum reputation per sender and rank the senders.

    Every sender present in transfers gets an entry, with total 0 when none
    of its transfers matched. Ties keep first-seen order.

    Args:
        transfers: Transfers, already time-filtered
        reputation: Lookup to resolve each transfer against
        with_tokens: Attach distinct items with positive reputation per sender
    """
    totals: dict[str, float] = {}
    tokens: dict[str, list[TokenContribution]] = {}
    seen_pairs: dict[str, set[tuple[str, float]]] = {}

    for transfer in transfers:
        rep = reputation.value_for(transfer)
        sender = transfer.sender_id
        totals[sender] = totals.get(sender, 0.0) + rep

        if not with_tokens:
            continue
        tokens.setdefault(sender, [])
        seen = seen_pairs.setdefault(sender, set())
        title = transfer.display_title
        key = (normalize_title(title), rep)
        if rep > 0 and key not in seen:
            seen.add(key)
            tokens[sender].append(TokenContribution(title=title, rep=rep))

    # sorted() is stable, also with reverse=True
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    return [
        LeaderboardEntry(
            wallet=wallet,
            total=total,
            tokens=tokens.get(wallet) if with_tokens else None,
        )
        for wallet, total in ranked
    ]


def _unique_token_ids(transfers: list[TransferRecord]) -> list[str]:
    return list(dict.fromkeys(t.token_id for t in transfers if t.token_id))


def _unique_titles(transfers: list[TransferRecord]) -> list[str]:
    return list(dict.fromkeys(normalize_title(t.title) for t in transfers if t.title))


class LeaderboardService:
    """Service for generating reputation leaderboards."""

    def __init__(self, datasource: DataSource, config: Config):
        self.datasource = datasource
        self.config = config
        self.transfers = TransferService(datasource, config)
        self.reputation = ReputationService(datasource, config)

    async def get_leaderboard(
        self,
        query: LeaderboardQuery,
        mode: MatchMode = MatchMode.TOKEN_ID,
        fallback: bool = True,
    ) -> LeaderboardResponse:
        """
        Run the fetch, resolve, aggregate pipeline for one wallet.

        Args:
            query: Resolved request parameters
            mode: Match by token id (per-owner record) or by title (global catalogue)
            fallback: In token mode, look up tokens missing from the owner record

        Returns:
            LeaderboardResponse, with debug data when query.debug is set
        """
        fetched = await self.transfers.fetch(query)
        transfers = fetched.transfers

        debug: Optional[dict] = None
        if mode == MatchMode.TITLE:
            resolved = await self.reputation.resolve_by_title()
            if query.debug:
                titles = _unique_titles(transfers)
                debug = {
                    "titles": titles,
                    "matched_titles": [t for t in titles if t in resolved.reputation],
                    "missing_titles": [t for t in titles if t not in resolved.reputation],
                }
        else:
            token_ids = _unique_token_ids(transfers)
            resolved = await self.reputation.resolve_by_token(
                query.wallet_id, token_ids, fallback=fallback
            )
            if query.debug:
                debug = {
                    "token_ids": token_ids,
                    "matched_token_ids": [t for t in token_ids if t in resolved.reputation],
                    "missing_token_ids": [t for t in token_ids if t not in resolved.reputation],
                }

        leaderboard = build_leaderboard(transfers, resolved.reputation, query.with_tokens)
        logger.info(
            f"Leaderboard for {query.wallet_id}: {len(leaderboard)} senders "
            f"from {len(transfers)} transfers ({mode.value} match)"
        )

        if debug is not None:
            debug.update({
                "wallet_id": query.wallet_id,
                "time_range": {"start_nano": query.start_nano, "end_nano": query.end_nano},
                "pagination": fetched.stats.as_dict(),
                "reputation_map": resolved.reputation.values,
                "reputation_failed": resolved.failed,
                "raw_reputation": resolved.raw,
            })

        return LeaderboardResponse(leaderboard=leaderboard, debug=debug)
