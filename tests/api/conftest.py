"""API test fixtures — FastAPI app wired to the per-test database through an injected AppContext.

Invariants:
    - The app never loads settings from the environment during tests
    - Session cookies are carried by the client between requests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from hackerclone.config import load_settings
from hackerclone.context import AppContext
from hackerclone.main import create_app

from tests.helpers import TEST_SECRET


@pytest.fixture
def settings(database_url):
    return load_settings(database_url=database_url, secret_key=TEST_SECRET)


@pytest.fixture
def context(settings, db, store, auth) -> AppContext:
    return AppContext(settings=settings, db=db, store=store, auth=auth)


@pytest.fixture
async def client(context):
    app = create_app(context)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

