"""Content Store — CRUD, joins, ordering and the comment threading rules.

Tests cover:
    - User creation, uniqueness and lookups (NotFound on miss)
    - Post creation stamps created_at; listing joins the right author in id order
    - Comments: root vs reply linkage, same-post parent rule, missing references
    - Profile listings by user
    - Every operation hands its connection back to the pool
"""

import pytest

from hackerclone.core.domain_types import PasswordHash
from hackerclone.core.errors import (
    ConstraintViolationError, DuplicateUsernameError, ResourceNotFoundError,
    ValidationError,
)


# --- Users --------------------------------------------------------------------

async def test_create_user_assigns_id(store):
    user = await store.create_user("carol", "carol@x.com", PasswordHash("h"))
    assert isinstance(user.id, int)
    assert user.username == "carol"
    assert user.password == "h"


async def test_duplicate_username_rejected(store, alice):
    with pytest.raises(DuplicateUsernameError) as exc_info:
        await store.create_user("alice", "other@x.com", PasswordHash("h2"))
    assert exc_info.value.username == "alice"


async def test_distinct_usernames_succeed(store):
    ids = set()
    for name in ("u1", "u2", "u3"):
        ids.add((await store.create_user(name, f"{name}@x.com", PasswordHash("h"))).id)
    assert len(ids) == 3


async def test_blank_username_rejected(store):
    with pytest.raises(ValidationError):
        await store.create_user("   ", "x@x.com", PasswordHash("h"))


async def test_find_user_by_username_and_id(store, alice):
    assert (await store.find_user_by_username("alice")).id == alice.id
    assert (await store.find_user_by_username("  alice ")).id == alice.id
    assert (await store.find_user_by_id(alice.id)).username == "alice"


async def test_missing_user_is_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        await store.find_user_by_username("nobody")
    with pytest.raises(ResourceNotFoundError):
        await store.find_user_by_id(9999)


# --- Posts --------------------------------------------------------------------

async def test_create_post_stamps_created_at(store, alice):
    post = await store.create_post("T", "https://x", alice.id)
    assert post.id is not None
    assert post.author == alice.id
    assert post.created_at is not None


async def test_create_post_for_unknown_author_is_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        await store.create_post("T", "https://x", 9999)


async def test_find_post(store, alice_post):
    found = await store.find_post(alice_post.id)
    assert found.title == "T"
    with pytest.raises(ResourceNotFoundError):
        await store.find_post(alice_post.id + 100)


async def test_list_posts_with_authors_joins_correctly(store, alice, bob):
    p1 = await store.create_post("first", "https://a", alice.id)
    p2 = await store.create_post("second", "https://b", bob.id)
    p3 = await store.create_post("third", "https://c", alice.id)

    rows = await store.list_posts_with_authors()

    assert [p.id for p, _ in rows] == [p1.id, p2.id, p3.id]
    for post, user in rows:
        assert post.author == user.id
    assert [u.username for _, u in rows] == ["alice", "bob", "alice"]


async def test_list_posts_with_authors_empty(store):
    assert await store.list_posts_with_authors() == []


async def test_list_posts_by_user(store, alice, bob):
    await store.create_post("a1", "https://a", alice.id)
    await store.create_post("b1", "https://b", bob.id)
    await store.create_post("a2", "https://c", alice.id)
    titles = [p.title for p in await store.list_posts_by_user(alice.id)]
    assert titles == ["a1", "a2"]


# --- Comments -----------------------------------------------------------------

async def test_root_comment_has_no_parent(store, alice, alice_post):
    comment = await store.create_comment("nice", alice_post.id, alice.id)
    assert comment.parent_comment_id is None
    assert comment.created_at is not None


async def test_reply_keeps_parent_link(store, alice, bob, alice_post):
    root = await store.create_comment("nice", alice_post.id, alice.id)
    reply = await store.create_comment("agreed", alice_post.id, bob.id, root.id)
    assert reply.parent_comment_id == root.id
    fetched = await store.find_comment(reply.id)
    assert fetched.parent_comment_id == root.id


async def test_list_comments_for_post_is_flat_and_joined(store, alice, bob, alice_post):
    root = await store.create_comment("nice", alice_post.id, alice.id)
    reply = await store.create_comment("agreed", alice_post.id, bob.id, root.id)
    other_post = await store.create_post("other", "https://o", bob.id)
    await store.create_comment("elsewhere", other_post.id, bob.id)

    rows = await store.list_comments_for_post(alice_post.id)

    assert [c.id for c, _ in rows] == [root.id, reply.id]
    assert [(c.user_id, u.id) for c, u in rows] == [(alice.id, alice.id), (bob.id, bob.id)]
    assert rows[1][0].parent_comment_id == root.id


async def test_comment_on_missing_post_is_not_found(store, alice):
    with pytest.raises(ResourceNotFoundError):
        await store.create_comment("hello", 9999, alice.id)


async def test_comment_by_missing_user_is_not_found(store, alice_post):
    with pytest.raises(ResourceNotFoundError):
        await store.create_comment("hello", alice_post.id, 9999)


async def test_reply_to_missing_parent_is_not_found(store, alice, alice_post):
    with pytest.raises(ResourceNotFoundError):
        await store.create_comment("hello", alice_post.id, alice.id, 9999)


async def test_reply_across_posts_is_constraint_violation(store, alice, alice_post):
    other = await store.create_post("other", "https://o", alice.id)
    root = await store.create_comment("on other", other.id, alice.id)
    with pytest.raises(ConstraintViolationError):
        await store.create_comment("misplaced", alice_post.id, alice.id, root.id)
    assert await store.list_comments_for_post(alice_post.id) == []


async def test_list_comments_by_user(store, alice, bob, alice_post):
    await store.create_comment("a", alice_post.id, alice.id)
    await store.create_comment("b", alice_post.id, bob.id)
    await store.create_comment("c", alice_post.id, alice.id)
    assert [c.comment for c in await store.list_comments_by_user(alice.id)] == ["a", "c"]


# --- Pool discipline ----------------------------------------------------------

async def test_operations_release_connections(store, db, alice, alice_post):
    await store.list_posts_with_authors()
    await store.create_comment("x", alice_post.id, alice.id)
    with pytest.raises(ResourceNotFoundError):
        await store.find_post(12345)
    with pytest.raises(DuplicateUsernameError):
        await store.create_user("alice", "a@x.com", PasswordHash("h"))
    assert db.checked_out() == 0
