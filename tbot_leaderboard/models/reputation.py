"""Reputation models: upstream response shapes and the normalized lookup map."""

import logging
from typing import Annotated, Any, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .transfer import TransferRecord

logger = logging.getLogger(__name__)


def normalize_title(title: str) -> str:
    """Catalogue titles are matched trimmed and case-insensitively."""
    return title.strip().lower()


class ReputationEntry(BaseModel):
    """A single key -> reputation pair."""
    model_config = ConfigDict(frozen=True)

    key: str
    reputation: float


class TokenReputation(BaseModel):
    """Reputation of one token, as found in owner records and flat lists."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    token_id: str
    reputation: float


class TitleReputation(BaseModel):
    """Reputation of one catalogue item, keyed by title."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str
    reputation: float


class CatalogueReputation(BaseModel):
    """Global catalogue: `{"reputation_records": [...]}` or a bare array of `{title, reputation}`."""
    kind: Literal["catalogue"] = "catalogue"
    records: list[TitleReputation] = Field(default_factory=list)

    def entries(self) -> list[ReputationEntry]:
        return [
            ReputationEntry(key=normalize_title(r.title), reputation=r.reputation)
            for r in self.records
        ]


class OwnerReputation(BaseModel):
    """Per-owner record with one or more categorized token lists."""
    kind: Literal["owner"] = "owner"
    categories: dict[str, list[TokenReputation]] = Field(default_factory=dict)

    def entries(self) -> list[ReputationEntry]:
        return [
            ReputationEntry(key=t.token_id, reputation=t.reputation)
            for tokens in self.categories.values()
            for t in tokens
        ]


class FlatReputation(BaseModel):
    """Bare array of `{token_id, reputation}`."""
    kind: Literal["flat"] = "flat"
    tokens: list[TokenReputation] = Field(default_factory=list)

    def entries(self) -> list[ReputationEntry]:
        return [ReputationEntry(key=t.token_id, reputation=t.reputation) for t in self.tokens]


class SingleTokenReputation(BaseModel):
    """Single-token lookup response: one `{token_id, reputation}` object."""
    kind: Literal["single"] = "single"
    token: TokenReputation

    def entries(self) -> list[ReputationEntry]:
        return [ReputationEntry(key=self.token.token_id, reputation=self.token.reputation)]


ReputationPayload = Annotated[
    Union[CatalogueReputation, OwnerReputation, FlatReputation, SingleTokenReputation],
    Field(discriminator="kind"),
]


def _valid_items(raw: Any, model: type[BaseModel]) -> list:
    """Validate each list item, skipping the ones that don't fit."""
    if not isinstance(raw, list):
        return []
    items = []
    for item in raw:
        try:
            items.append(model.model_validate(item))
        except ValidationError:
            logger.debug(f"Skipping malformed reputation item: {item!r}")
    return items


def parse_reputation_payload(
    payload: Any,
    owner_categories: Iterable[str] = ("nfts",),
    key_kind: Literal["token_id", "title"] = "token_id",
) -> Optional[ReputationPayload]:
    """
    Map a raw reputation response onto one of the known shapes.

    key_kind selects which shapes are acceptable: title lookups only take
    the catalogue (wrapped in `reputation_records` or a bare array of
    `{title, reputation}`), token lookups take the owner record, a bare
    array of `{token_id, reputation}` or a single token.

    Returns None when the payload matches none of them.
    """
    if key_kind == "title":
        if isinstance(payload, list):
            return CatalogueReputation(records=_valid_items(payload, TitleReputation))
        if isinstance(payload, dict) and "reputation_records" in payload:
            return CatalogueReputation(
                records=_valid_items(payload["reputation_records"], TitleReputation)
            )
        return None

    if isinstance(payload, list):
        return FlatReputation(tokens=_valid_items(payload, TokenReputation))

    if not isinstance(payload, dict):
        return None

    if "token_id" in payload and "reputation" in payload:
        try:
            return SingleTokenReputation(token=TokenReputation.model_validate(payload))
        except ValidationError:
            return None

    categories = {
        name: _valid_items(payload[name], TokenReputation)
        for name in owner_categories
        if isinstance(payload.get(name), list)
    }
    if categories:
        return OwnerReputation(categories=categories)

    return None


class ReputationMap(BaseModel):
    """
    Normalized reputation lookup built for a single request.

    kind tells how a transfer is matched: by token id or by normalized title.
    """
    kind: Literal["token_id", "title"]
    values: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def empty(cls, kind: Literal["token_id", "title"]) -> "ReputationMap":
        return cls(kind=kind)

    def add(self, entries: Iterable[ReputationEntry]) -> None:
        """Add entries; a later entry for the same key replaces an earlier one."""
        for entry in entries:
            self.values[entry.key] = entry.reputation

    def key_for(self, transfer: TransferRecord) -> Optional[str]:
        if self.kind == "title":
            return normalize_title(transfer.title) if transfer.title else None
        return transfer.token_id

    def value_for(self, transfer: TransferRecord) -> float:
        """Reputation of a transfer's token; 0 when unmatched."""
        key = self.key_for(transfer)
        if key is None:
            return 0.0
        return self.values.get(key, 0.0)

    def __contains__(self, key: object) -> bool:
        return key in self.values
