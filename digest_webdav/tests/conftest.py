from collections.abc import AsyncIterator
from unittest.mock import Mock

import pytest
import pytest_asyncio

from digest_webdav.api.http_client import DigestHttpClient
from digest_webdav.client import WebDavClient
from digest_webdav.config import WebDavConfig
from digest_webdav.tests.utils.mock_transport import MockTransport

USERNAME = "harry"
PASSWORD = "s3cret"


@pytest.fixture
def config() -> WebDavConfig:
    return WebDavConfig(base_url="https://dav.example.com", username=USERNAME, password=PASSWORD)


@pytest.fixture
def verbose_config() -> WebDavConfig:
    return WebDavConfig(
        base_url="https://dav.example.com",
        username=USERNAME,
        password=PASSWORD,
        verbose=True,
    )


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest_asyncio.fixture
async def http(
    config: WebDavConfig, mock_transport: MockTransport
) -> AsyncIterator[DigestHttpClient]:
    client = DigestHttpClient(config, transport=mock_transport)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def client(
    config: WebDavConfig, mock_transport: MockTransport
) -> AsyncIterator[WebDavClient]:
    async with WebDavClient(config, transport=mock_transport) as dav:
        yield dav


@pytest.fixture
def mock_http() -> Mock:
    return Mock()
