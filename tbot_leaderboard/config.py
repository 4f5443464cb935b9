"""Application configuration."""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # API settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # dialog-tbot API
    tbot_api_url: str = "https://dialog-tbot.com"
    nft_transfers_path: str = "/history/nft-transfers/"
    ft_transfers_path: str = "/history/ft-transfers/"
    reputation_path: str = "/reputation/"
    request_timeout: float = 30.0

    # Pagination defaults
    default_limit: int = 200
    default_skip: int = 0
    ft_default_limit: int = 200
    # Upper bound on pages per request, guards against upstreams that never return a short page
    max_pages: int = 500

    # Reputation lookup
    max_token_lookups: int = 100
    reputation_required: bool = False
    owner_categories: tuple[str, ...] = field(default_factory=lambda: ("nfts",))

    # Fungible-token proxy preset
    ft_wallet_id: str = "oao_north.near"
    ft_symbol: str = "GRECHA"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        categories = os.getenv("REPUTATION_CATEGORIES", "nfts")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            tbot_api_url=os.getenv("TBOT_API_URL", "https://dialog-tbot.com"),
            nft_transfers_path=os.getenv("NFT_TRANSFERS_PATH", "/history/nft-transfers/"),
            ft_transfers_path=os.getenv("FT_TRANSFERS_PATH", "/history/ft-transfers/"),
            reputation_path=os.getenv("REPUTATION_PATH", "/reputation/"),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            default_limit=int(os.getenv("DEFAULT_LIMIT", "200")),
            default_skip=int(os.getenv("DEFAULT_SKIP", "0")),
            ft_default_limit=int(os.getenv("FT_DEFAULT_LIMIT", "200")),
            max_pages=int(os.getenv("MAX_PAGES", "500")),
            max_token_lookups=int(os.getenv("MAX_TOKEN_LOOKUPS", "100")),
            reputation_required=_env_bool("REPUTATION_REQUIRED", False),
            owner_categories=tuple(
                c.strip() for c in categories.split(",") if c.strip()
            ),
            ft_wallet_id=os.getenv("FT_WALLET_ID", "oao_north.near"),
            ft_symbol=os.getenv("FT_SYMBOL", "GRECHA"),
        )
