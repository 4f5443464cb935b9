"""Transfer record model for dialog-tbot history responses."""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


def _coerce_nanos(value: Any) -> Optional[int]:
    """Nanosecond timestamp from an int, integral float or digit string; else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class TransferRecord(BaseModel):
    """
    A single incoming transfer as returned by the history API.

    Upstream records name the sender either `sender_id` or `from`, and carry
    the token id and title either at the top level or nested under `args`.
    """
    model_config = ConfigDict(frozen=True)

    sender_id: str = Field(min_length=1)
    token_id: Optional[str] = Field(default=None, description="Token id or symbol")
    title: Optional[str] = Field(default=None, description="NFT title if present")
    timestamp_nanosec: Optional[int] = Field(
        default=None, description="Timestamp in nanoseconds since epoch"
    )

    @model_validator(mode="before")
    @classmethod
    def _flatten_upstream(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        args = data.get("args") if isinstance(data.get("args"), dict) else {}

        sender = data.get("sender_id") or data.get("from")
        token_id = data.get("token_id")
        if token_id is None:
            token_id = args.get("token_id")
        title = args.get("title") or data.get("title")

        # Optional fields that don't parse are dropped, not the whole record
        return {
            "sender_id": sender,
            "token_id": str(token_id) if isinstance(token_id, (str, int)) else None,
            "title": title if isinstance(title, str) else None,
            "timestamp_nanosec": _coerce_nanos(data.get("timestamp_nanosec")),
        }

    @property
    def display_title(self) -> str:
        """Title for display, falling back to the token id."""
        return self.title or self.token_id or ""

    def within(self, start_nano: Optional[int], end_nano: Optional[int]) -> bool:
        """Inclusive time-range check. No bounds means everything matches."""
        if start_nano is None and end_nano is None:
            return True
        if self.timestamp_nanosec is None:
            return False
        if start_nano is not None and self.timestamp_nanosec < start_nano:
            return False
        if end_nano is not None and self.timestamp_nanosec > end_nano:
            return False
        return True


def parse_transfer_page(payload: Any) -> list[TransferRecord]:
    """
    Parse one page of the history API.

    Accepts `{nft_transfers: [...]}` or `{transfers: [...]}`. Records that
    cannot be attributed to a sender are dropped.
    """
    if not isinstance(payload, dict):
        return []
    raw = payload.get("nft_transfers")
    if raw is None:
        raw = payload.get("transfers")
    if not isinstance(raw, list):
        return []

    records = []
    for item in raw:
        try:
            records.append(TransferRecord.model_validate(item))
        except ValidationError:
            logger.debug(f"Skipping unparseable transfer record: {item!r}")
    return records


def raw_page_size(payload: Any) -> int:
    """Number of records the upstream returned, before parsing."""
    if not isinstance(payload, dict):
        return 0
    raw = payload.get("nft_transfers")
    if raw is None:
        raw = payload.get("transfers")
    return len(raw) if isinstance(raw, list) else 0
