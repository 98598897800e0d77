"""Auth Routes — signup, login, logout and the current-session probe.

Invariants:
    - Login sets the signed session token as an HttpOnly cookie; logout deletes it
    - Failed logins answer 401 with the same body whether the user exists or not
"""

from fastapi import APIRouter, Depends, Response, status

from hackerclone.api.dependencies import cookie_settings, current_user, get_context
from hackerclone.context import AppContext
from hackerclone.models.user import User
from hackerclone.schemas.content import SessionResponse, UserResponse
from hackerclone.schemas.forms import LoginForm, RegistrationForm

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def signup(body: RegistrationForm, ctx: AppContext = Depends(get_context)):
    user = await ctx.auth.register(body.username, body.email, body.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=SessionResponse)
async def login(
    body: LoginForm, response: Response, ctx: AppContext = Depends(get_context),
):
    identity = await ctx.auth.login(body.username, body.password)
    response.set_cookie(
        ctx.settings.session_cookie_name, identity.token, **cookie_settings(ctx),
    )
    return SessionResponse(username=identity.username)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(ctx: AppContext = Depends(get_context)):
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(ctx.settings.session_cookie_name)
    return response


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(current_user)):
    return UserResponse.model_validate(user)
