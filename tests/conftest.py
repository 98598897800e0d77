"""Root conftest — shared fixtures: file-backed SQLite pool, fast hasher, services.

Invariants:
    - Every test gets its own database file under tmp_path (real queue pool, real FKs)
    - Argon2 runs with minimal cost parameters so suites stay fast
    - No test reads the developer's DATABASE_URL or SECRET_KEY
"""

import os

import pytest
from argon2 import PasswordHasher

from hackerclone.infrastructure.credential_hasher import CredentialHasher
from hackerclone.infrastructure.database import DatabaseSessionManager
from hackerclone.infrastructure.session_identity import SessionSigner
from hackerclone.services.auth_service import AuthService
from hackerclone.services.content_store import ContentStore

from tests.helpers import TEST_SECRET

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")


@pytest.fixture
def fast_argon2() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'hackerclone.db'}"


@pytest.fixture
async def db(database_url):
    manager = DatabaseSessionManager(database_url, pool_size=3, pool_timeout=1.0)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def store(db) -> ContentStore:
    return ContentStore(db)


@pytest.fixture
def hasher(fast_argon2) -> CredentialHasher:
    return CredentialHasher(TEST_SECRET, hasher=fast_argon2)


@pytest.fixture
def signer() -> SessionSigner:
    return SessionSigner(TEST_SECRET)


@pytest.fixture
def auth(store, hasher, signer) -> AuthService:
    return AuthService(store, hasher, signer)
