"""Comment Threads — rebuilds reply trees from the flat (comment, author) rows the store returns.

Invariants:
    - Every input comment appears exactly once in the output forest
    - Siblings keep the input order (store order is comment id order)
    - A reply whose parent is absent from the input is promoted to a root

Design Decisions:
    - Pure function over duck-typed rows: core never imports ORM models
    - Store stays flat; tree shape is a presentation concern built on demand
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol


class CommentLike(Protocol):
    id: int
    parent_comment_id: int | None


@dataclass
class CommentNode:
    comment: Any
    author: Any
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def reply_count(self) -> int:
        """Total number of descendants."""
        return sum(1 + r.reply_count for r in self.replies)


def build_threads(rows: Iterable[tuple[CommentLike, Any]]) -> list[CommentNode]:
    """Group flat (comment, author) rows into root nodes with nested replies."""
    # Parents always precede replies in id order; only earlier rows can adopt.
    seen: dict[int, CommentNode] = {}
    roots: list[CommentNode] = []
    for comment, author in rows:
        node = CommentNode(comment=comment, author=author)
        parent_id = comment.parent_comment_id
        parent = seen.get(parent_id) if parent_id is not None else None
        if parent is None:
            roots.append(node)
        else:
            parent.replies.append(node)
        seen[comment.id] = node
    return roots
