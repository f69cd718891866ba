"""Link external OAuth2 identities to local user records."""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Protocol

from src.auth.models import ExternalProfile
from src.config import Settings, get_settings
from src.constants import DEFAULT_USER_NAME, GITHUB_SCOPE, PROVIDER_GITHUB
from src.models.user import User, UserStatus
from src.utils.logging import LogContext, get_logger

logger = get_logger(__name__)


class UserStoreProtocol(Protocol):
    """Persistence operations the strategy relies on."""

    async def find_one(self, **filters) -> User | None: ...

    async def create(self, **fields) -> User: ...

    async def save(self, user: User) -> User: ...


class NoEmailProvidedError(Exception):
    """The provider profile carries no usable email address."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"No email provided by {provider}")
        self.provider = provider


@dataclass
class AuthResult:
    """Outcome of a handshake: a user on success, an error on failure."""

    user: User | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.user is not None


@dataclass(frozen=True)
class IdentityLinkStrategy:
    """OAuth2 provider registration plus the create-or-link handshake handler."""

    provider: str
    client_id: str
    client_secret: str = field(repr=False)
    callback_url: str
    scope: str = ""

    async def verify(
        self,
        store: UserStoreProtocol,
        access_token: str | None,
        refresh_token: str | None,
        profile: ExternalProfile,
    ) -> AuthResult:
        """Resolve or create the local user for a completed handshake.

        Writes at most once: a create for an unknown email, or a save that
        backfills provider fields on an unlinked account. Failures are
        returned in the result rather than raised.
        """
        log = LogContext(logger, provider=self.provider, profile_id=str(profile.id))

        email = _resolve_email(profile)
        if not email:
            log.warning("Handshake rejected: profile has no email")
            return AuthResult(error=NoEmailProvidedError(self.provider))

        avatar = _resolve_avatar(profile)
        try:
            user = await store.find_one(email=email)

            if user is None:
                first_name, last_name = _split_name(profile.display_name)
                user = await store.create(
                    email=email,
                    name=profile.display_name or profile.login or DEFAULT_USER_NAME,
                    first_name=first_name,
                    last_name=last_name,
                    avatar=avatar,
                    provider=self.provider,
                    # A profile without an id is stored as "None", not rejected
                    provider_id=str(profile.id),
                    verified=True,
                    status=UserStatus.ACTIVE,
                    contact="",
                    location=profile.location or "",
                    password=None,
                )
                log.info(f"Created user {user.id}")
            elif not user.provider_id:
                user.provider = self.provider
                user.provider_id = str(profile.id)
                if not user.avatar and avatar:
                    user.avatar = avatar
                user = await store.save(user)
                log.info(f"Linked existing user {user.id}")
            else:
                log.debug(f"User {user.id} already linked to {user.provider}")
        except Exception as e:
            log.error(f"Handshake failed: {e}")
            return AuthResult(error=e)

        return AuthResult(user=user)


def _resolve_email(profile: ExternalProfile) -> str | None:
    if profile.emails and profile.emails[0].value:
        return profile.emails[0].value
    return profile.email or None


def _resolve_avatar(profile: ExternalProfile) -> str | None:
    if profile.photos and profile.photos[0].value:
        return profile.photos[0].value
    return profile.avatar_url or None


def _split_name(display_name: str | None) -> tuple[str, str]:
    """First whitespace token and the rest, e.g. "Ada Lovelace" -> ("Ada", "Lovelace")."""
    parts = display_name.split() if display_name else []
    if not parts:
        return DEFAULT_USER_NAME, ""
    return parts[0], " ".join(parts[1:])


def create_github_strategy(settings: Settings) -> IdentityLinkStrategy | None:
    """Build the GitHub strategy, or None when credentials are incomplete."""
    credentials = settings.github_oauth
    if credentials is None:
        logger.info("GitHub OAuth disabled: credentials not configured")
        return None

    return IdentityLinkStrategy(
        provider=PROVIDER_GITHUB,
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
        callback_url=credentials.callback_url,
        scope=GITHUB_SCOPE,
    )


@lru_cache
def get_github_strategy() -> IdentityLinkStrategy | None:
    """Get the cached GitHub strategy for the current settings."""
    return create_github_strategy(get_settings())
