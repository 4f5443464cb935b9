"""API routes for the reputation leaderboard service."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DataSource
from tbot_leaderboard.exceptions import UpstreamError, ValidationError
from tbot_leaderboard.models import LeaderboardResponse
from tbot_leaderboard.services import (
    LeaderboardService,
    MatchMode,
    TransferService,
    resolve_leaderboard_query,
)
from tbot_leaderboard.services.params import parse_flag, parse_int
from .dependencies import get_config, get_datasource

router = APIRouter(prefix="/api")


# Numeric and boolean parameters are taken as strings: unparseable values
# fall back to defaults instead of failing the request.


@router.get(
    "/nft-reputation",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
)
async def get_nft_reputation(
    wallet_id: Optional[str] = Query(
        None,
        description="Receiving wallet",
        example="oao_north.near"
    ),
    limit: Optional[str] = Query(None, description="Page size for the history API"),
    skip: Optional[str] = Query(None, description="Starting offset"),
    start_time: Optional[str] = Query(
        None,
        description="ISO 8601 lower bound (inclusive)",
        example="2025-01-01T00:00:00Z"
    ),
    end_time: Optional[str] = Query(
        None,
        description="ISO 8601 upper bound (inclusive)",
        example="2025-02-01T00:00:00Z"
    ),
    tokens: Optional[str] = Query(None, description="Attach contributing tokens per wallet"),
    fallback: Optional[str] = Query(None, description="Look up tokens missing from the owner record"),
    debug: Optional[str] = Query(None, description="Include diagnostics"),
    datasource: DataSource = Depends(get_datasource),
    config: Config = Depends(get_config),
) -> LeaderboardResponse:
    """
    Rank senders of NFTs to a wallet by the reputation of what they sent.

    Reputation comes from the wallet's reputation record, matched by token id.
    Returns: leaderboard[wallet, total, tokens?], debug?
    """
    query = resolve_leaderboard_query(
        config,
        wallet_id=wallet_id,
        limit=limit,
        skip=skip,
        start_time=start_time,
        end_time=end_time,
        debug=debug,
        tokens=tokens,
    )
    service = LeaderboardService(datasource, config)
    return await service.get_leaderboard(
        query,
        mode=MatchMode.TOKEN_ID,
        fallback=parse_flag(fallback, default=True),
    )


@router.get(
    "/nft-title-reputation",
    response_model=LeaderboardResponse,
    response_model_exclude_none=True,
)
async def get_nft_title_reputation(
    wallet_id: Optional[str] = Query(
        None,
        description="Receiving wallet",
        example="oao_north.near"
    ),
    limit: Optional[str] = Query(None, description="Page size for the history API"),
    skip: Optional[str] = Query(None, description="Starting offset"),
    start_time: Optional[str] = Query(None, description="ISO 8601 lower bound (inclusive)"),
    end_time: Optional[str] = Query(None, description="ISO 8601 upper bound (inclusive)"),
    tokens: Optional[str] = Query(None, description="Attach contributing titles per wallet (default true)"),
    debug: Optional[str] = Query(None, description="Include diagnostics"),
    datasource: DataSource = Depends(get_datasource),
    config: Config = Depends(get_config),
) -> LeaderboardResponse:
    """
    Rank senders of NFTs to a wallet using the global reputation catalogue.

    Items are matched by title, trimmed and case-insensitive.
    """
    query = resolve_leaderboard_query(
        config,
        wallet_id=wallet_id,
        limit=limit,
        skip=skip,
        start_time=start_time,
        end_time=end_time,
        debug=debug,
        tokens=tokens,
        tokens_default=True,
    )
    service = LeaderboardService(datasource, config)
    return await service.get_leaderboard(query, mode=MatchMode.TITLE)


async def _proxy_ft_transfers(
    datasource: DataSource,
    config: Config,
    wallet_id: str,
    symbol: Optional[str],
    limit: Optional[int],
    skip: Optional[int],
) -> JSONResponse:
    service = TransferService(datasource, config)
    try:
        data = await service.get_ft_transfers(wallet_id, symbol, limit=limit, skip=skip)
    except UpstreamError as e:
        if e.status_code is None:
            raise
        return JSONResponse(status_code=e.status_code, content={"error": str(e)})
    return JSONResponse(content=data)


@router.get("/ft-transfers")
async def get_ft_transfers(
    wallet_id: Optional[str] = Query(None, description="Receiving wallet"),
    symbol: Optional[str] = Query(None, description="Token symbol", example="GRECHA"),
    limit: Optional[str] = Query(None, description="Page size"),
    skip: Optional[str] = Query(None, description="Offset"),
    datasource: DataSource = Depends(get_datasource),
    config: Config = Depends(get_config),
) -> JSONResponse:
    """
    Proxy one page of incoming fungible-token transfers.

    An upstream error status is passed through with the upstream body.
    """
    if wallet_id is None or not wallet_id.strip():
        raise ValidationError("Parameter wallet_id is required")
    return await _proxy_ft_transfers(
        datasource,
        config,
        wallet_id=wallet_id.strip(),
        symbol=symbol,
        limit=parse_int(limit),
        skip=parse_int(skip),
    )


@router.get("/grecha")
async def get_grecha(
    datasource: DataSource = Depends(get_datasource),
    config: Config = Depends(get_config),
) -> JSONResponse:
    """Incoming transfers of the configured token to the configured wallet."""
    return await _proxy_ft_transfers(
        datasource,
        config,
        wallet_id=config.ft_wallet_id,
        symbol=config.ft_symbol,
        limit=None,
        skip=None,
    )
