"""Request Dependencies — pull the AppContext off app.state and resolve the session cookie."""

from fastapi import Depends, Request

from hackerclone.context import AppContext
from hackerclone.models.user import User


def get_context(request: Request) -> AppContext:
    return request.app.state.context


async def current_user(
    request: Request, ctx: AppContext = Depends(get_context),
) -> User:
    """Authorize the caller from the signed session cookie; 401 when absent or invalid."""
    token = request.cookies.get(ctx.settings.session_cookie_name)
    return await ctx.auth.authorize(token)


def cookie_settings(ctx: AppContext) -> dict:
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": ctx.settings.session_cookie_secure,
        "max_age": ctx.settings.session_max_age_seconds,
    }
