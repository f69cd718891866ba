"""OAuth login and token endpoints."""

from typing import Annotated, Any

import httpx
from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth import get_current_user
from src.auth.oauth import fetch_github_profile, get_oauth_client
from src.auth.strategy import IdentityLinkStrategy, get_github_strategy
from src.auth.tokens import TokenError, create_token, parse_duration, verify_token
from src.config import get_settings
from src.constants import TOKEN_TYPE
from src.db import get_db
from src.db.crud import UserStore
from src.models.user import User
from src.utils.logging import get_logger

router = APIRouter()
settings = get_settings()
logger = get_logger(__name__)


class RefreshTokenRequest(BaseModel):
    """Schema for exchanging a refresh token."""

    refresh_token: str


# ============== Helpers ==============


def _require_github_strategy() -> IdentityLinkStrategy:
    strategy = get_github_strategy()
    if strategy is None:
        raise HTTPException(status_code=501, detail="GitHub OAuth not configured")
    return strategy


def _user_summary(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "avatar": user.avatar,
        "provider": user.provider,
        "verified": user.verified,
        "status": user.status.value,
    }


def _access_token_for(user: User) -> str:
    return create_token(
        {"sub": str(user.id), "email": user.email},
        settings.jwt_access_secret,
        settings.jwt_access_expires_in,
    )


def _issue_token_pair(user: User) -> dict[str, Any]:
    """Mint an access/refresh token pair for a freshly authenticated user."""
    refresh = create_token(
        {"sub": str(user.id)},
        settings.jwt_refresh_secret,
        settings.jwt_refresh_expires_in,
    )
    return {
        "token_type": TOKEN_TYPE,
        "access_token": _access_token_for(user),
        "expires_in": int(parse_duration(settings.jwt_access_expires_in).total_seconds()),
        "refresh_token": refresh,
    }


def _login_failed() -> RedirectResponse:
    return RedirectResponse(url=settings.oauth_failure_redirect, status_code=302)


# ============== GitHub OAuth ==============


@router.get("/github")
async def github_login(request: Request) -> RedirectResponse:
    """Initiate GitHub OAuth login."""
    strategy = _require_github_strategy()
    client = get_oauth_client(strategy)
    return await client.authorize_redirect(request, strategy.callback_url)


@router.get("/github/callback")
async def github_callback(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Any:
    """Handle GitHub OAuth callback."""
    strategy = _require_github_strategy()
    client = get_oauth_client(strategy)

    try:
        token = await client.authorize_access_token(request)
        profile = await fetch_github_profile(client, token)
    except (OAuthError, httpx.HTTPError) as e:
        logger.warning(f"GitHub handshake failed: {e}")
        return _login_failed()

    result = await strategy.verify(
        UserStore(db),
        token.get("access_token"),
        token.get("refresh_token"),
        profile,
    )
    if not result.ok:
        return _login_failed()

    user = result.user
    if settings.oauth_session:
        request.session["user_id"] = user.id

    return {"success": True, "user": _user_summary(user), **_issue_token_pair(user)}


@router.get("/login-failed")
async def login_failed() -> JSONResponse:
    """Landing endpoint for failed OAuth handshakes."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": "OAuth login failed"},
    )


# ============== Tokens ==============


@router.post("/refresh-token")
async def refresh_token(
    body: RefreshTokenRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """Exchange a refresh token for a new access token."""
    try:
        claims = verify_token(body.refresh_token, settings.jwt_refresh_secret)
    except TokenError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e

    subject = str(claims.get("sub", ""))
    user = await UserStore(db).get(int(subject)) if subject.isdigit() else None
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return {
        "token_type": TOKEN_TYPE,
        "access_token": _access_token_for(user),
        "expires_in": int(parse_duration(settings.jwt_access_expires_in).total_seconds()),
    }


# ============== Common ==============


@router.get("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Log out the current user."""
    request.session.clear()
    return RedirectResponse(url="/", status_code=302)


@router.get("/me")
async def get_me(user: Annotated[User, Depends(get_current_user)]) -> dict:
    """Get current authenticated user."""
    return _user_summary(user)
