"""Reputation service: builds the per-request reputation lookup."""

from dataclasses import dataclass, field
from typing import Any, Optional
import logging

from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DataSource
from tbot_leaderboard.exceptions import UpstreamError
from tbot_leaderboard.models import ReputationMap, parse_reputation_payload

logger = logging.getLogger(__name__)


@dataclass
class ReputationResult:
    """Reputation lookup plus the raw payloads it was built from."""
    reputation: ReputationMap
    raw: dict[str, Any] = field(default_factory=dict)
    failed: bool = False


class ReputationService:
    """
    Service for resolving reputation values.

    Reputation is best-effort: upstream failures and unrecognised payloads
    give an empty map, unless config.reputation_required is set.
    """

    def __init__(self, datasource: DataSource, config: Config):
        self.datasource = datasource
        self.config = config

    async def _fetch(
        self,
        owner: Optional[str] = None,
        token_id: Optional[str] = None,
    ) -> Any:
        try:
            return await self.datasource.get_reputation(owner=owner, token_id=token_id)
        except UpstreamError as e:
            if self.config.reputation_required:
                raise UpstreamError(f"Reputation API {e.status_code}: {e}") from e
            logger.warning(f"Reputation lookup failed (owner={owner}, token_id={token_id}): {e}")
            return None

    def _malformed(self, payload: Any) -> None:
        if self.config.reputation_required:
            raise UpstreamError("Reputation API returned an unrecognised payload")
        logger.warning(f"Unrecognised reputation payload of type {type(payload).__name__}")

    async def resolve_by_title(self) -> ReputationResult:
        """
        Build a title-keyed map from the global catalogue.
        """
        result = ReputationResult(reputation=ReputationMap.empty("title"))
        payload = await self._fetch()
        result.raw["catalogue"] = payload
        if payload is None:
            result.failed = True
            return result

        parsed = parse_reputation_payload(
            payload, self.config.owner_categories, key_kind="title"
        )
        if parsed is None:
            self._malformed(payload)
            result.failed = True
            return result

        result.reputation.add(parsed.entries())
        logger.info(f"Loaded {len(result.reputation.values)} catalogue reputation records")
        return result

    async def resolve_by_token(
        self,
        owner: str,
        token_ids: list[str],
        fallback: bool = True,
    ) -> ReputationResult:
        """
        Build a token-id keyed map for the tokens an owner received.

        The per-owner record is fetched once and restricted to token_ids.
        With fallback, ids the record did not cover are looked up one by one
        (up to config.max_token_lookups). Fallback is skipped when the
        per-owner call itself failed.

        Args:
            owner: Wallet whose reputation record is requested
            token_ids: Token ids observed in the transfers, first-seen order
            fallback: Look up missing ids individually
        """
        result = ReputationResult(reputation=ReputationMap.empty("token_id"))
        wanted = set(token_ids)

        payload = await self._fetch(owner=owner)
        result.raw["bulk"] = payload
        if payload is None:
            result.failed = True
            return result

        parsed = parse_reputation_payload(payload, self.config.owner_categories)
        if parsed is None:
            self._malformed(payload)
        else:
            result.reputation.add(e for e in parsed.entries() if e.key in wanted)

        if not fallback:
            return result

        missing = [t for t in token_ids if t not in result.reputation]
        if len(missing) > self.config.max_token_lookups:
            logger.warning(
                f"{len(missing)} tokens missing from reputation record for {owner}, "
                f"looking up the first {self.config.max_token_lookups}"
            )
            missing = missing[: self.config.max_token_lookups]

        per_token: dict[str, Any] = {}
        for token_id in missing:
            try:
                token_payload = await self.datasource.get_reputation(owner=owner, token_id=token_id)
            except UpstreamError as e:
                logger.debug(f"Reputation lookup for token {token_id} failed: {e}")
                per_token[token_id] = None
                continue
            per_token[token_id] = token_payload
            token_parsed = parse_reputation_payload(token_payload, self.config.owner_categories)
            if token_parsed is not None:
                result.reputation.add(e for e in token_parsed.entries() if e.key == token_id)

        if per_token:
            result.raw["tokens"] = per_token
        return result
