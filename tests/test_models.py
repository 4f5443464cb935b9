"""Tests for transfer and reputation models."""

from tbot_leaderboard.models import (
    CatalogueReputation,
    FlatReputation,
    OwnerReputation,
    ReputationMap,
    SingleTokenReputation,
    TransferRecord,
    parse_reputation_payload,
    parse_transfer_page,
    raw_page_size,
)


class TestTransferRecord:
    def test_sender_and_token_at_top_level(self) -> None:
        record = TransferRecord.model_validate(
            {"sender_id": "alice.near", "token_id": "7", "timestamp_nanosec": 1700000000000000000}
        )
        assert record.sender_id == "alice.near"
        assert record.token_id == "7"
        assert record.timestamp_nanosec == 1700000000000000000

    def test_from_and_nested_args(self) -> None:
        record = TransferRecord.model_validate(
            {"from": "bob.near", "args": {"token_id": 42, "title": "Golden Ticket"}}
        )
        assert record.sender_id == "bob.near"
        assert record.token_id == "42"
        assert record.title == "Golden Ticket"
        assert record.display_title == "Golden Ticket"

    def test_timestamp_string_keeps_full_precision(self) -> None:
        record = TransferRecord.model_validate(
            {"sender_id": "a", "token_id": "1", "timestamp_nanosec": "1712345678123456789"}
        )
        assert record.timestamp_nanosec == 1712345678123456789

    def test_within_is_inclusive(self) -> None:
        record = TransferRecord(sender_id="a", token_id="1", timestamp_nanosec=100)
        assert record.within(100, 100)
        assert record.within(None, 100)
        assert record.within(100, None)
        assert not record.within(101, None)
        assert not record.within(None, 99)

    def test_missing_timestamp_only_excluded_with_bounds(self) -> None:
        record = TransferRecord(sender_id="a", token_id="1")
        assert record.within(None, None)
        assert not record.within(0, None)

    def test_bad_optional_fields_become_none(self) -> None:
        record = TransferRecord.model_validate(
            {"sender_id": "a", "token_id": "1", "timestamp_nanosec": "n/a", "args": {"title": 5}}
        )
        assert record.sender_id == "a"
        assert record.token_id == "1"
        assert record.timestamp_nanosec is None
        assert record.title is None

    def test_integral_float_timestamp(self) -> None:
        record = TransferRecord.model_validate({"sender_id": "a", "timestamp_nanosec": 1.7e18})
        assert record.timestamp_nanosec == 1700000000000000000


class TestTransferPage:
    def test_nft_transfers_key(self) -> None:
        payload = {"nft_transfers": [{"sender_id": "a", "token_id": "1"}]}
        assert [r.sender_id for r in parse_transfer_page(payload)] == ["a"]
        assert raw_page_size(payload) == 1

    def test_transfers_key(self) -> None:
        payload = {"transfers": [{"from": "a", "token_id": "1"}, {"from": "b", "token_id": "2"}]}
        assert [r.sender_id for r in parse_transfer_page(payload)] == ["a", "b"]

    def test_records_without_sender_are_dropped(self) -> None:
        payload = {"transfers": [{"token_id": "1"}, {"from": "b", "token_id": "2"}, "junk"]}
        records = parse_transfer_page(payload)
        assert [r.sender_id for r in records] == ["b"]
        # Page size still counts what the upstream sent
        assert raw_page_size(payload) == 3

    def test_records_with_bad_optional_fields_are_kept(self) -> None:
        payload = {"nft_transfers": [
            {"sender_id": "a", "token_id": "1", "timestamp_nanosec": "n/a"},
            {"sender_id": "b", "token_id": "1", "args": {"title": 5}},
        ]}
        assert [r.sender_id for r in parse_transfer_page(payload)] == ["a", "b"]

    def test_unexpected_payload(self) -> None:
        assert parse_transfer_page(["a"]) == []
        assert parse_transfer_page({"items": []}) == []
        assert raw_page_size(None) == 0


class TestReputationPayload:
    def test_catalogue(self) -> None:
        parsed = parse_reputation_payload(
            {"reputation_records": [{"title": "  Golden Ticket ", "reputation": 10}]},
            key_kind="title",
        )
        assert isinstance(parsed, CatalogueReputation)
        assert [(e.key, e.reputation) for e in parsed.entries()] == [("golden ticket", 10.0)]

    def test_bare_array_catalogue(self) -> None:
        parsed = parse_reputation_payload(
            [{"title": "Golden Ticket", "reputation": 4}, {"token_id": "1", "reputation": 9}],
            key_kind="title",
        )
        assert isinstance(parsed, CatalogueReputation)
        assert [(e.key, e.reputation) for e in parsed.entries()] == [("golden ticket", 4.0)]

    def test_title_lookup_rejects_token_shapes(self) -> None:
        assert parse_reputation_payload({"nfts": [{"token_id": "7", "reputation": 9}]}, key_kind="title") is None
        assert parse_reputation_payload({"token_id": "7", "reputation": 9}, key_kind="title") is None

    def test_token_lookup_rejects_catalogue(self) -> None:
        payload = {"reputation_records": [{"title": "7", "reputation": 9}]}
        assert parse_reputation_payload(payload) is None

    def test_owner_record_with_categories(self) -> None:
        payload = {
            "owner": "alice.near",
            "nfts": [{"token_id": "1", "reputation": 10}],
            "sbts": [{"token_id": "2", "reputation": "5"}],
        }
        parsed = parse_reputation_payload(payload, owner_categories=("nfts", "sbts"))
        assert isinstance(parsed, OwnerReputation)
        assert {e.key: e.reputation for e in parsed.entries()} == {"1": 10.0, "2": 5.0}

    def test_owner_record_ignores_unconfigured_categories(self) -> None:
        payload = {"nfts": [{"token_id": "1", "reputation": 10}], "other": [{"token_id": "2", "reputation": 5}]}
        parsed = parse_reputation_payload(payload)
        assert {e.key for e in parsed.entries()} == {"1"}

    def test_flat_array_skips_bad_items(self) -> None:
        parsed = parse_reputation_payload(
            [{"token_id": 1, "reputation": 3}, {"token_id": "2"}, {"reputation": "x", "token_id": "3"}]
        )
        assert isinstance(parsed, FlatReputation)
        assert [(e.key, e.reputation) for e in parsed.entries()] == [("1", 3.0)]

    def test_single_token(self) -> None:
        parsed = parse_reputation_payload({"token_id": "9", "reputation": 4.5})
        assert isinstance(parsed, SingleTokenReputation)
        assert parsed.entries()[0].reputation == 4.5

    def test_unknown_shapes(self) -> None:
        assert parse_reputation_payload({"error": "nope"}) is None
        assert parse_reputation_payload("text") is None
        assert parse_reputation_payload(None) is None


class TestReputationMap:
    def test_title_lookup_is_normalized(self) -> None:
        reputation = ReputationMap(kind="title", values={"golden ticket": 10.0})
        transfer = TransferRecord(sender_id="a", token_id="1", title=" GOLDEN Ticket")
        assert reputation.value_for(transfer) == 10.0

    def test_token_lookup_and_unmatched(self) -> None:
        reputation = ReputationMap(kind="token_id", values={"1": 10.0})
        assert reputation.value_for(TransferRecord(sender_id="a", token_id="1")) == 10.0
        assert reputation.value_for(TransferRecord(sender_id="a", token_id="2")) == 0.0
        assert reputation.value_for(TransferRecord(sender_id="a")) == 0.0

    def test_title_map_without_title(self) -> None:
        reputation = ReputationMap(kind="title", values={"1": 10.0})
        assert reputation.value_for(TransferRecord(sender_id="a", token_id="1")) == 0.0
