"""Abstract base class for data sources."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class DataSource(ABC):
    """
    Abstract interface for the transfer-history and reputation APIs.

    Implementations return parsed JSON bodies and raise UpstreamError on a
    non-success status or a failed call. Deciding whether a failure is
    fatal is left to the services.
    """

    @abstractmethod
    async def get_nft_transfers(self, wallet_id: str, limit: int, skip: int) -> Any:
        """
        Retrieve one page of incoming NFT transfers for a wallet.

        Args:
            wallet_id: Receiving wallet (e.g. 'oao_north.near')
            limit: Page size
            skip: Offset of the first record

        Returns:
            Response body, normally `{"nft_transfers": [...]}` or `{"transfers": [...]}`
        """
        pass

    @abstractmethod
    async def get_ft_transfers(
        self,
        wallet_id: str,
        symbol: Optional[str],
        limit: int,
        skip: int,
    ) -> Any:
        """
        Retrieve one page of incoming fungible-token transfers for a wallet.

        Args:
            wallet_id: Receiving wallet
            symbol: Token symbol filter, None for all tokens
            limit: Page size
            skip: Offset of the first record
        """
        pass

    @abstractmethod
    async def get_reputation(
        self,
        owner: Optional[str] = None,
        token_id: Optional[str] = None,
    ) -> Any:
        """
        Retrieve reputation data.

        With no arguments this is the global catalogue; with owner it is the
        per-owner record; with owner and token_id a single-token lookup.
        """
        pass

    async def close(self) -> None:
        """
        Clean up resources (e.g., close HTTP sessions).

        Override this if the data source holds resources that need cleanup.
        """
        pass
