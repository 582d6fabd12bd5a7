from __future__ import annotations

import httpx
import pytest

from tests.helpers import StubServer
from tmapi.adapters.http_client import HttpDispatcher
from tmapi.core.config import AppSettings
from tmapi.core.domain.connection import Connection


@pytest.fixture
def connection() -> Connection:
    return Connection(
        host="tm.example.com",
        username="a@b.com",
        password="p",
        organization_id="7",
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def stub() -> StubServer:
    return StubServer()


@pytest.fixture
def dispatcher(connection: Connection, settings: AppSettings, stub: StubServer):
    client = httpx.Client(transport=httpx.MockTransport(stub))
    with HttpDispatcher(connection, settings, client=client) as dispatcher:
        yield dispatcher
    client.close()
