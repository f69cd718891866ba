"""Authentication module."""

from src.auth.dependencies import get_current_user, get_optional_user
from src.auth.strategy import (
    AuthResult,
    IdentityLinkStrategy,
    NoEmailProvidedError,
    create_github_strategy,
    get_github_strategy,
)
from src.auth.tokens import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    create_token,
    verify_token,
)

__all__ = [
    "AuthResult",
    "IdentityLinkStrategy",
    "NoEmailProvidedError",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_github_strategy",
    "create_token",
    "get_current_user",
    "get_github_strategy",
    "get_optional_user",
    "verify_token",
]
