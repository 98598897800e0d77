"""User Routes — public profile with the user's posts and comments."""

from fastapi import APIRouter, Depends

from hackerclone.api.dependencies import get_context
from hackerclone.context import AppContext
from hackerclone.core.domain_types import UserId
from hackerclone.schemas.content import (
    CommentResponse, PostResponse, ProfilePage, UserResponse,
)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{username}", response_model=ProfilePage)
async def user_profile(username: str, ctx: AppContext = Depends(get_context)):
    user = await ctx.store.find_user_by_username(username)
    posts = await ctx.store.list_posts_by_user(UserId(user.id))
    comments = await ctx.store.list_comments_by_user(UserId(user.id))
    return ProfilePage(
        user=UserResponse.model_validate(user),
        posts=[PostResponse.model_validate(p) for p in posts],
        comments=[CommentResponse.model_validate(c) for c in comments],
    )
