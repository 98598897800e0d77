"""Response Schemas — public views of users, posts, comments and threads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from hackerclone.core.comment_threads import CommentNode


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    link: str
    author: int
    created_at: datetime


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    comment: str
    post_id: int
    user_id: int
    parent_comment_id: int | None
    created_at: datetime


class PostWithAuthor(BaseModel):
    post: PostResponse
    author: UserResponse


class CommentThread(BaseModel):
    comment: CommentResponse
    author: UserResponse
    reply_count: int = 0
    replies: list["CommentThread"] = []

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentThread":
        return cls(
            comment=CommentResponse.model_validate(node.comment),
            author=UserResponse.model_validate(node.author),
            reply_count=node.reply_count,
            replies=[cls.from_node(r) for r in node.replies],
        )


class PostPage(BaseModel):
    post: PostResponse
    author: UserResponse
    comments: list[CommentThread]


class ProfilePage(BaseModel):
    user: UserResponse
    posts: list[PostResponse]
    comments: list[CommentResponse]


class SessionResponse(BaseModel):
    username: str
