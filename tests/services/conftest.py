"""Service test fixtures — seeded users and posts on the per-test database."""

import pytest

from hackerclone.core.domain_types import PasswordHash


@pytest.fixture
async def alice(store):
    return await store.create_user("alice", "alice@x.com", PasswordHash("hash-a"))


@pytest.fixture
async def bob(store):
    return await store.create_user("bob", "bob@x.com", PasswordHash("hash-b"))


@pytest.fixture
async def alice_post(store, alice):
    return await store.create_post("T", "https://x", alice.id)
