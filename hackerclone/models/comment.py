"""Comment ORM — a threaded reply on a post.

Invariants:
    - post_id and user_id are required foreign keys
    - parent_comment_id is NULL for root comments; otherwise it names a comment on the same post
    - created_at is stamped at insert time and never updated

Design Decisions:
    - Same-post parent rule is checked by ContentStore.create_comment, not by a DB constraint
      (a composite FK would need a redundant unique key on comments)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from hackerclone.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id"), nullable=False, index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comments.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return (
            f"Comment(id={self.id!r}, post_id={self.post_id!r}, "
            f"parent_comment_id={self.parent_comment_id!r})"
        )
