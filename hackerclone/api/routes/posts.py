"""Post Routes — front page listing, submission, post detail and commenting.

Invariants:
    - Mutations require an authorized session (current_user dependency)
    - Post detail returns comments as reply trees built by core/comment_threads.py
"""

from fastapi import APIRouter, Depends, status

from hackerclone.api.dependencies import current_user, get_context
from hackerclone.context import AppContext
from hackerclone.core.comment_threads import build_threads
from hackerclone.core.domain_types import CommentId, PostId, UserId
from hackerclone.models.user import User
from hackerclone.schemas.content import (
    CommentResponse, CommentThread, PostPage, PostResponse, PostWithAuthor, UserResponse,
)
from hackerclone.schemas.forms import CommentForm, PostForm

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("", response_model=list[PostWithAuthor])
async def list_posts(ctx: AppContext = Depends(get_context)):
    rows = await ctx.store.list_posts_with_authors()
    return [
        PostWithAuthor(
            post=PostResponse.model_validate(post),
            author=UserResponse.model_validate(author),
        )
        for post, author in rows
    ]


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def submit_post(
    body: PostForm,
    user: User = Depends(current_user),
    ctx: AppContext = Depends(get_context),
):
    post = await ctx.store.create_post(body.title, body.link, UserId(user.id))
    return PostResponse.model_validate(post)


@router.get("/{post_id}", response_model=PostPage)
async def post_page(post_id: int, ctx: AppContext = Depends(get_context)):
    post = await ctx.store.find_post(PostId(post_id))
    author = await ctx.store.find_user_by_id(UserId(post.author))
    rows = await ctx.store.list_comments_for_post(PostId(post_id))
    return PostPage(
        post=PostResponse.model_validate(post),
        author=UserResponse.model_validate(author),
        comments=[CommentThread.from_node(n) for n in build_threads(rows)],
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    body: CommentForm,
    user: User = Depends(current_user),
    ctx: AppContext = Depends(get_context),
):
    parent = CommentId(body.parent_comment_id) if body.parent_comment_id else None
    comment = await ctx.store.create_comment(
        body.comment, PostId(post_id), UserId(user.id), parent,
    )
    return CommentResponse.model_validate(comment)
