"""dialog-tbot.com data source implementation."""

import logging
from typing import Any, Optional

import httpx

from tbot_leaderboard.exceptions import UpstreamError
from .base import DataSource

logger = logging.getLogger(__name__)

# API constants
DIALOG_TBOT_API_URL = "https://dialog-tbot.com"
NFT_TRANSFERS_PATH = "/history/nft-transfers/"
FT_TRANSFERS_PATH = "/history/ft-transfers/"
REPUTATION_PATH = "/reputation/"
REQUEST_TIMEOUT = 30.0


class DialogTbotDataSource(DataSource):
    """
    Data source for the dialog-tbot history and reputation APIs.

    Every call is a single attempt: failures are raised as UpstreamError
    and never retried.
    """

    def __init__(
        self,
        api_url: str = DIALOG_TBOT_API_URL,
        nft_transfers_path: str = NFT_TRANSFERS_PATH,
        ft_transfers_path: str = FT_TRANSFERS_PATH,
        reputation_path: str = REPUTATION_PATH,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize dialog-tbot data source.

        Args:
            api_url: Base URL of the API
            nft_transfers_path: Path of the NFT transfer history endpoint
            ft_transfers_path: Path of the fungible-token transfer history endpoint
            reputation_path: Path of the reputation endpoint
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        self.api_url = api_url
        self.nft_transfers_path = nft_transfers_path
        self.ft_transfers_path = ft_transfers_path
        self.reputation_path = reputation_path
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _get(self, path: str, params: dict) -> Any:
        """
        Make a GET request and return the decoded JSON body.

        Raises:
            UpstreamError: on a non-success status, a transport failure
                or a body that is not JSON
        """
        client = await self._get_client()

        try:
            response = await client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise UpstreamError(f"Request to {path} failed: {e}") from e

        if not response.is_success:
            text = response.text
            logger.warning(f"Upstream {response.status_code} for {path} {params}")
            raise UpstreamError(
                f"Upstream {response.status_code}: {text}",
                status_code=response.status_code,
                body=text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {path}: {e}") from e

    async def get_nft_transfers(self, wallet_id: str, limit: int, skip: int) -> Any:
        """Retrieve one page of incoming NFT transfers."""
        params = {
            "wallet_id": wallet_id,
            "direction": "in",
            "limit": limit,
            "skip": skip,
        }
        return await self._get(self.nft_transfers_path, params)

    async def get_ft_transfers(
        self,
        wallet_id: str,
        symbol: Optional[str],
        limit: int,
        skip: int,
    ) -> Any:
        """Retrieve one page of incoming fungible-token transfers."""
        params: dict[str, Any] = {
            "wallet_id": wallet_id,
            "direction": "in",
        }
        if symbol:
            params["symbol"] = symbol
        params["limit"] = limit
        params["skip"] = skip
        return await self._get(self.ft_transfers_path, params)

    async def get_reputation(
        self,
        owner: Optional[str] = None,
        token_id: Optional[str] = None,
    ) -> Any:
        """Retrieve the global catalogue, an owner record or a single token."""
        params = {}
        if owner is not None:
            params["owner"] = owner
        if token_id is not None:
            params["token_id"] = token_id
        return await self._get(self.reputation_path, params)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
