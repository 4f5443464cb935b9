"""Tests for reputation resolution."""

import pytest

from tbot_leaderboard.config import Config
from tbot_leaderboard.exceptions import UpstreamError
from tbot_leaderboard.services import ReputationService

OWNER = "w.near"


class TestResolveByToken:
    @pytest.mark.asyncio
    async def test_bulk_record_restricted_to_observed_tokens(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(OWNER, None)] = (
            200,
            {"nfts": [
                {"token_id": "1", "reputation": 10},
                {"token_id": "2", "reputation": 5},
                {"token_id": "99", "reputation": 1000},
            ]},
        )
        service = ReputationService(datasource, config)

        result = await service.resolve_by_token(OWNER, ["1", "2"])

        assert result.reputation.values == {"1": 10.0, "2": 5.0}
        assert result.failed is False
        # Everything matched, so no per-token lookups
        assert len(fake_api.calls_to("/reputation/")) == 1

    @pytest.mark.asyncio
    async def test_flat_array_record(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(OWNER, None)] = (200, [{"token_id": "1", "reputation": 7}])
        service = ReputationService(datasource, config)

        result = await service.resolve_by_token(OWNER, ["1"])

        assert result.reputation.values == {"1": 7.0}

    @pytest.mark.asyncio
    async def test_per_token_fallback(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(OWNER, None)] = (200, {"nfts": [{"token_id": "1", "reputation": 10}]})
        fake_api.reputation[(OWNER, "2")] = (200, {"token_id": "2", "reputation": 3})
        fake_api.reputation[(OWNER, "3")] = (500, "boom")
        service = ReputationService(datasource, config)

        result = await service.resolve_by_token(OWNER, ["1", "2", "3"])

        assert result.reputation.values == {"1": 10.0, "2": 3.0}
        lookups = [c.url.params.get("token_id") for c in fake_api.calls_to("/reputation/")]
        assert lookups == [None, "2", "3"]
        assert result.raw["tokens"] == {"2": {"token_id": "2", "reputation": 3}, "3": None}

    @pytest.mark.asyncio
    async def test_fallback_disabled(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(OWNER, None)] = (200, {"nfts": []})
        service = ReputationService(datasource, config)

        result = await service.resolve_by_token(OWNER, ["1", "2"], fallback=False)

        assert result.reputation.values == {}
        assert len(fake_api.calls_to("/reputation/")) == 1

    @pytest.mark.asyncio
    async def test_fallback_lookup_cap(self, fake_api, datasource) -> None:
        fake_api.reputation[(OWNER, None)] = (200, {"nfts": []})
        service = ReputationService(datasource, Config(max_token_lookups=2))

        await service.resolve_by_token(OWNER, ["1", "2", "3", "4"])

        assert len(fake_api.calls_to("/reputation/")) == 3

    @pytest.mark.asyncio
    async def test_upstream_failure_gives_empty_map(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(OWNER, None)] = (500, "internal error")
        service = ReputationService(datasource, config)

        result = await service.resolve_by_token(OWNER, ["1", "2"])

        assert result.reputation.values == {}
        assert result.failed is True
        # No per-token lookups once the record call failed
        assert len(fake_api.calls_to("/reputation/")) == 1

    @pytest.mark.asyncio
    async def test_upstream_failure_raises_when_required(self, fake_api, datasource) -> None:
        fake_api.reputation[(OWNER, None)] = (503, "unavailable")
        service = ReputationService(datasource, Config(reputation_required=True))

        with pytest.raises(UpstreamError, match="Reputation API 503"):
            await service.resolve_by_token(OWNER, ["1"])

    @pytest.mark.asyncio
    async def test_malformed_record_falls_back_per_token(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(OWNER, None)] = (200, {"unexpected": True})
        fake_api.reputation[(OWNER, "1")] = (200, [{"token_id": "1", "reputation": 2}])
        service = ReputationService(datasource, config)

        result = await service.resolve_by_token(OWNER, ["1"])

        assert result.reputation.values == {"1": 2.0}


class TestResolveByTitle:
    @pytest.mark.asyncio
    async def test_catalogue(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(None, None)] = (
            200,
            {"reputation_records": [
                {"title": "Golden Ticket", "reputation": 10},
                {"title": " Silver Coin ", "reputation": 2.5},
            ]},
        )
        service = ReputationService(datasource, config)

        result = await service.resolve_by_title()

        assert result.reputation.kind == "title"
        assert result.reputation.values == {"golden ticket": 10.0, "silver coin": 2.5}
        (call,) = fake_api.calls_to("/reputation/")
        assert dict(call.url.params) == {}

    @pytest.mark.asyncio
    async def test_bare_array_catalogue(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(None, None)] = (200, [{"title": "Golden Ticket", "reputation": 4}])
        service = ReputationService(datasource, config)

        result = await service.resolve_by_title()

        assert result.reputation.values == {"golden ticket": 4.0}
        assert result.failed is False

    @pytest.mark.asyncio
    async def test_token_shaped_payload_is_not_a_catalogue(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(None, None)] = (200, {"nfts": [{"token_id": "7", "reputation": 9}]})
        service = ReputationService(datasource, config)

        result = await service.resolve_by_title()

        assert result.reputation.values == {}
        assert result.failed is True

    @pytest.mark.asyncio
    async def test_malformed_catalogue(self, fake_api, datasource, config) -> None:
        fake_api.reputation[(None, None)] = (200, "<html>")
        service = ReputationService(datasource, config)

        result = await service.resolve_by_title()

        assert result.reputation.values == {}
        assert result.failed is True

    @pytest.mark.asyncio
    async def test_malformed_catalogue_raises_when_required(self, fake_api, datasource) -> None:
        fake_api.reputation[(None, None)] = (200, {"nothing": []})
        service = ReputationService(datasource, Config(reputation_required=True))

        with pytest.raises(UpstreamError):
            await service.resolve_by_title()
