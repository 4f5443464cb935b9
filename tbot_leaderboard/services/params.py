"""Resolution of raw query parameters into a LeaderboardQuery."""

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from tbot_leaderboard.config import Config
from tbot_leaderboard.exceptions import ValidationError
from tbot_leaderboard.models import LeaderboardQuery

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NANOS_PER_MS = 1_000_000
TRUE_VALUES = ("1", "true", "yes", "on")


def parse_iso_to_nanos(value: Optional[str]) -> Optional[int]:
    """
    Convert an ISO 8601 timestamp to nanoseconds since epoch.

    Precision is milliseconds (epoch_ms * 1_000_000). Values without an
    offset are read as UTC. Unparseable values return None.
    """
    if value is None or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.info(f"Ignoring unparseable time bound: {value!r}")
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    epoch_ms = (dt - EPOCH) // timedelta(milliseconds=1)
    return epoch_ms * NANOS_PER_MS


def parse_flag(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def resolve_leaderboard_query(
    config: Config,
    wallet_id: Optional[str],
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    debug: Optional[str] = None,
    tokens: Optional[str] = None,
    tokens_default: bool = False,
) -> LeaderboardQuery:
    """
    Apply defaults and parse the leaderboard query string.

    Args:
        config: Application configuration supplying the defaults
        wallet_id: Receiving wallet, required
        limit: Page size; missing, unparseable or non-positive uses the default
        skip: Starting offset; missing, unparseable or negative uses the default
        start_time: ISO 8601 lower bound, ignored when unparseable
        end_time: ISO 8601 upper bound, ignored when unparseable
        debug: Include diagnostics in the response
        tokens: Attach contributing items to each entry
        tokens_default: Value of tokens when not given

    Raises:
        ValidationError: if wallet_id is missing
    """
    if wallet_id is None or not wallet_id.strip():
        raise ValidationError("Parameter wallet_id is required")

    parsed_limit = parse_int(limit)
    if parsed_limit is None or parsed_limit <= 0:
        parsed_limit = config.default_limit

    parsed_skip = parse_int(skip)
    if parsed_skip is None or parsed_skip < 0:
        parsed_skip = config.default_skip

    return LeaderboardQuery(
        wallet_id=wallet_id.strip(),
        limit=parsed_limit,
        skip=parsed_skip,
        start_nano=parse_iso_to_nanos(start_time),
        end_nano=parse_iso_to_nanos(end_time),
        debug=parse_flag(debug),
        with_tokens=parse_flag(tokens, default=tokens_default),
    )
