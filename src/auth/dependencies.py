"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.tokens import TokenError, verify_token
from src.config import get_settings
from src.db import get_db
from src.db.crud import UserStore
from src.models.user import User
from src.utils.logging import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User | None:
    """Get current user from a bearer token, falling back to the session."""
    store = UserStore(db)

    if credentials is not None:
        try:
            claims = verify_token(credentials.credentials, get_settings().jwt_access_secret)
        except TokenError as e:
            logger.debug(f"Rejected bearer token: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(e),
                headers={"WWW-Authenticate": "Bearer"},
            ) from e
        subject = str(claims.get("sub", ""))
        return await store.get(int(subject)) if subject.isdigit() else None

    user_id = request.session.get("user_id")
    if not user_id:
        return None

    user = await store.get(user_id)

    # If user_id in session but user doesn't exist in DB, clear stale session
    if not user:
        request.session.clear()

    return user


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Get current user, raising 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
