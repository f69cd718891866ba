"""OAuth client registry using Authlib."""

from typing import Any

from authlib.integrations.starlette_client import OAuth, StarletteOAuth2App

from src.auth.models import ExternalProfile
from src.auth.strategy import IdentityLinkStrategy
from src.constants import (
    GITHUB_API_BASE_URL,
    GITHUB_AUTHORIZE_URL,
    GITHUB_TOKEN_URL,
    HTTPX_TIMEOUT,
)
from src.utils.logging import get_logger

logger = get_logger(__name__)

oauth = OAuth()


def get_oauth_client(strategy: IdentityLinkStrategy) -> StarletteOAuth2App:
    """Return the Authlib client for a strategy, registering it on first use."""
    client = oauth.create_client(strategy.provider)
    if client is not None:
        return client

    logger.info(f"Registering OAuth provider '{strategy.provider}'")
    return oauth.register(
        name=strategy.provider,
        client_id=strategy.client_id,
        client_secret=strategy.client_secret,
        access_token_url=GITHUB_TOKEN_URL,
        access_token_params=None,
        authorize_url=GITHUB_AUTHORIZE_URL,
        authorize_params=None,
        api_base_url=GITHUB_API_BASE_URL,
        client_kwargs={"scope": strategy.scope, "timeout": HTTPX_TIMEOUT},
    )


async def fetch_github_profile(
    client: StarletteOAuth2App, token: dict[str, Any]
) -> ExternalProfile:
    """Fetch the authenticated GitHub user and their email addresses."""
    response = await client.get("user", token=token)
    response.raise_for_status()
    user = response.json()

    # Private addresses only show up here; missing scope is not fatal
    emails: list[dict[str, Any]] = []
    emails_response = await client.get("user/emails", token=token)
    if emails_response.status_code == 200:
        emails = emails_response.json()
    else:
        logger.debug(f"GitHub /user/emails returned {emails_response.status_code}")

    return ExternalProfile.from_github(user, emails)
