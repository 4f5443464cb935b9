"""Transfer service: paginated retrieval of incoming transfers."""

from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Optional
import logging

from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DataSource
from tbot_leaderboard.exceptions import UpstreamError
from tbot_leaderboard.models import (
    LeaderboardQuery,
    TransferRecord,
    parse_transfer_page,
    raw_page_size,
)

logger = logging.getLogger(__name__)


@dataclass
class PaginationStats:
    """Counters collected while walking the history pages."""
    pages_fetched: int = 0
    records_fetched: int = 0
    records_kept: int = 0
    truncated: bool = False

    def as_dict(self) -> dict:
        return {
            "pages_fetched": self.pages_fetched,
            "records_fetched": self.records_fetched,
            "records_kept": self.records_kept,
            "truncated": self.truncated,
        }


@dataclass
class TransferFetchResult:
    transfers: list[TransferRecord] = field(default_factory=list)
    stats: PaginationStats = field(default_factory=PaginationStats)


class TransferService:
    """Service for retrieving transfer history."""

    def __init__(self, datasource: DataSource, config: Config):
        self.datasource = datasource
        self.config = config

    async def iter_pages(
        self,
        query: LeaderboardQuery,
        stats: Optional[PaginationStats] = None,
    ) -> AsyncIterator[list[TransferRecord]]:
        """
        Yield pages of NFT transfers, each filtered to the query's time range.

        Pagination stops at the first failed call, an empty page, a page
        shorter than the requested limit, or after max_pages calls. A failed
        call ends the walk quietly; pages already yielded stand.
        """
        if stats is None:
            stats = PaginationStats()
        skip = query.skip

        for _ in range(self.config.max_pages):
            try:
                payload = await self.datasource.get_nft_transfers(
                    query.wallet_id, query.limit, skip
                )
            except UpstreamError as e:
                logger.warning(
                    f"Transfer pagination for {query.wallet_id} stopped at skip={skip}: {e}"
                )
                stats.truncated = True
                return

            size = raw_page_size(payload)
            stats.pages_fetched += 1
            stats.records_fetched += size
            if size == 0:
                return

            page = [
                t for t in parse_transfer_page(payload)
                if t.within(query.start_nano, query.end_nano)
            ]
            stats.records_kept += len(page)
            yield page

            if size < query.limit:
                return
            skip += query.limit
        else:
            logger.warning(
                f"Reached max pages limit ({self.config.max_pages}) for wallet {query.wallet_id}"
            )
            stats.truncated = True

    async def fetch(self, query: LeaderboardQuery) -> TransferFetchResult:
        """Collect every page for a query."""
        result = TransferFetchResult()
        async for page in self.iter_pages(query, result.stats):
            result.transfers.extend(page)

        logger.info(
            f"Fetched {result.stats.records_fetched} transfers for {query.wallet_id} "
            f"in {result.stats.pages_fetched} pages, kept {result.stats.records_kept}"
        )
        return result

    async def get_ft_transfers(
        self,
        wallet_id: str,
        symbol: Optional[str],
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> Any:
        """
        Single call to the fungible-token history, returned as-is.

        UpstreamError propagates to the caller.
        """
        return await self.datasource.get_ft_transfers(
            wallet_id=wallet_id,
            symbol=symbol,
            limit=limit if limit and limit > 0 else self.config.ft_default_limit,
            skip=skip if skip is not None and skip >= 0 else self.config.default_skip,
        )
