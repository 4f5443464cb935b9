"""Shared test fixtures."""

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from fakes import API_URL, FakeTbotApi
from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DialogTbotDataSource


@pytest.fixture
def config() -> Config:
    return Config(tbot_api_url=API_URL, default_limit=200, max_pages=50)


@pytest.fixture
def fake_api() -> FakeTbotApi:
    return FakeTbotApi()


@pytest.fixture
def make_datasource(fake_api: FakeTbotApi):
    def _make() -> DialogTbotDataSource:
        return DialogTbotDataSource(
            api_url=API_URL,
            transport=httpx.MockTransport(fake_api.handler),
        )
    return _make


@pytest_asyncio.fixture
async def datasource(make_datasource) -> AsyncGenerator[DialogTbotDataSource, None]:
    source = make_datasource()
    yield source
    await source.close()
