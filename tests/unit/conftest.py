"""
Fixtures for offline harness checks against the in-memory fake API
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from revue_suite.config import SuiteConfig
from revue_suite.core.data_factory import DataFactory
from revue_suite.core.rest_client import RestClient
from tests.unit.fake_api import TEST_EMAIL, TEST_PASSWORD, TOKEN, FakeRevueApi


@pytest.fixture
def offline_config() -> SuiteConfig:
    return SuiteConfig(
        api_base_url="https://revue.test",
        request_timeout=5.0,
        email=TEST_EMAIL,
        password=TEST_PASSWORD,
        test_data_prefix="RC_UNIT",
    )


@pytest.fixture
def fake_api() -> FakeRevueApi:
    return FakeRevueApi()


@pytest.fixture
def registered_api(fake_api) -> FakeRevueApi:
    fake_api.users[TEST_EMAIL] = TEST_PASSWORD
    return fake_api


@pytest.fixture
def data_factory(offline_config) -> DataFactory:
    return DataFactory(offline_config, seed=1234)


@pytest_asyncio.fixture
async def authed_client(offline_config, fake_api) -> AsyncGenerator[RestClient, None]:
    client = RestClient(offline_config, token=TOKEN, transport=fake_api.transport())
    yield client
    await client.aclose()
