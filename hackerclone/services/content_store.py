"""Content Store — typed CRUD and join queries over users, posts and comments.

Invariants:
    - Every operation borrows exactly one pooled session and returns it on exit
    - Writes are single-row inserts committed inside the borrow; read-verify-write
      sequences (post/comment creation) run in one transaction
    - Listings are ordered by primary key (insertion order), never re-sorted
    - Lookup misses raise ResourceNotFoundError; constraint conflicts raise
      DuplicateUsernameError or ConstraintViolationError
    - Comment parents must exist and belong to the same post

Design Decisions:
    - Returns detached ORM records (expire_on_commit=False) instead of dicts:
      callers read attributes, the shell serialises through pydantic schemas
    - Comments come back flat; threading is core/comment_threads.py's job
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hackerclone.core.domain_types import CommentId, PasswordHash, PostId, UserId
from hackerclone.core.errors import (
    ConstraintViolationError, DuplicateUsernameError, ErrorContext,
    ResourceNotFoundError, ValidationError,
)
from hackerclone.infrastructure.database import DatabaseSessionManager
from hackerclone.models.comment import Comment
from hackerclone.models.post import Post
from hackerclone.models.user import User

logger = logging.getLogger(__name__)


class ContentStore:
    """Persistence for users, posts and comments."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    # ─── Users ───────────────────────────────────────────────────

    async def create_user(
        self, username: str, email: str, password_hash: PasswordHash,
    ) -> User:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username must not be empty", field="username")
        async with self.db.session() as session:
            if await self._user_by_username(session, username) is not None:
                raise DuplicateUsernameError(username)
            user = User(username=username, email=email, password=password_hash)
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                # Lost a race with a concurrent registration for the same name.
                await session.rollback()
                if "username" in str(e.orig).lower():
                    raise DuplicateUsernameError(username) from e
                raise ConstraintViolationError("User violates a table constraint") from e
        logger.info("User registered", extra={"username": user.username, "user_id": user.id})
        return user

    async def find_user_by_username(self, username: str) -> User:
        username = (username or "").strip()
        async with self.db.session() as session:
            user = await self._user_by_username(session, username)
        if user is None:
            raise ResourceNotFoundError(
                "User", username, ErrorContext(username=username),
            )
        return user

    async def find_user_by_id(self, user_id: UserId) -> User:
        async with self.db.session() as session:
            user = await session.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    # ─── Posts ───────────────────────────────────────────────────

    async def create_post(self, title: str, link: str, author_id: UserId) -> Post:
        async with self.db.session() as session:
            if await session.get(User, author_id) is None:
                raise ResourceNotFoundError("User", author_id)
            post = Post(title=title, link=link, author=author_id)
            session.add(post)
            await session.commit()
        logger.info("Post created", extra={"post_id": post.id, "user_id": author_id})
        return post

    async def find_post(self, post_id: PostId) -> Post:
        async with self.db.session() as session:
            post = await session.get(Post, post_id)
        if post is None:
            raise ResourceNotFoundError("Post", post_id, ErrorContext(post_id=post_id))
        return post

    async def list_posts_with_authors(self) -> list[tuple[Post, User]]:
        query = (
            select(Post, User)
            .join(User, Post.author == User.id)
            .order_by(Post.id)
        )
        async with self.db.session() as session:
            result = await session.execute(query)
            return [(post, user) for post, user in result.all()]

    async def list_posts_by_user(self, user_id: UserId) -> list[Post]:
        query = select(Post).where(Post.author == user_id).order_by(Post.id)
        async with self.db.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    # ─── Comments ────────────────────────────────────────────────

    async def create_comment(
        self,
        text: str,
        post_id: PostId,
        author_id: UserId,
        parent_comment_id: CommentId | None = None,
    ) -> Comment:
        """Insert a comment after checking post, author and parent in the same transaction."""
        ctx = ErrorContext(post_id=post_id, comment_id=parent_comment_id)
        async with self.db.session() as session:
            if await session.get(Post, post_id) is None:
                raise ResourceNotFoundError("Post", post_id, ctx)
            if await session.get(User, author_id) is None:
                raise ResourceNotFoundError("User", author_id, ctx)
            if parent_comment_id is not None:
                parent = await session.get(Comment, parent_comment_id)
                if parent is None:
                    raise ResourceNotFoundError("Comment", parent_comment_id, ctx)
                if parent.post_id != post_id:
                    raise ConstraintViolationError(
                        f"Comment {parent_comment_id} belongs to post "
                        f"{parent.post_id}, not {post_id}",
                        ctx,
                    )
            comment = Comment(
                comment=text,
                post_id=post_id,
                user_id=author_id,
                parent_comment_id=parent_comment_id,
            )
            session.add(comment)
            await session.commit()
        logger.info(
            "Comment created",
            extra={"comment_id": comment.id, "post_id": post_id, "user_id": author_id},
        )
        return comment

    async def find_comment(self, comment_id: CommentId) -> Comment:
        async with self.db.session() as session:
            comment = await session.get(Comment, comment_id)
        if comment is None:
            raise ResourceNotFoundError("Comment", comment_id)
        return comment

    async def list_comments_for_post(self, post_id: PostId) -> list[tuple[Comment, User]]:
        query = (
            select(Comment, User)
            .join(User, Comment.user_id == User.id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.id)
        )
        async with self.db.session() as session:
            result = await session.execute(query)
            return [(comment, user) for comment, user in result.all()]

    async def list_comments_by_user(self, user_id: UserId) -> list[Comment]:
        query = select(Comment).where(Comment.user_id == user_id).order_by(Comment.id)
        async with self.db.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    # ─── Helpers ─────────────────────────────────────────────────

    @staticmethod
    async def _user_by_username(session: AsyncSession, username: str) -> User | None:
        result = await session.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()
