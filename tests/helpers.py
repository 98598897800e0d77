"""Shared test helpers (not fixtures)."""

TEST_SECRET = "test-secret-key"


async def signup_and_login(client, username="alice", password="secret1"):
    """Register and log in through the HTTP shell; the client keeps the session cookie."""
    res = await client.post("/api/v1/auth/signup", json={
        "username": username, "email": f"{username}@x.com", "password": password,
    })
    assert res.status_code == 201, res.text
    res = await client.post("/api/v1/auth/login", json={
        "username": username, "password": password,
    })
    assert res.status_code == 200, res.text
    return res
