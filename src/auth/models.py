"""Authentication-related Pydantic models."""

from typing import Any

from pydantic import BaseModel


class ProfileValue(BaseModel):
    """A single email or photo entry of an external profile."""

    value: str | None = None


class ExternalProfile(BaseModel):
    """Identity returned by an OAuth provider after a successful handshake.

    Providers guarantee none of these fields, so every one is optional.
    """

    id: str | int | None = None
    display_name: str | None = None
    emails: list[ProfileValue] = []
    photos: list[ProfileValue] = []

    # Provider-specific flat fields
    email: str | None = None
    login: str | None = None
    avatar_url: str | None = None
    location: str | None = None

    @classmethod
    def from_github(
        cls,
        user: dict[str, Any],
        emails: list[dict[str, Any]] | None = None,
    ) -> "ExternalProfile":
        """Build a profile from GitHub's `/user` and `/user/emails` payloads.

        The primary address is listed first; entries without an address are
        skipped.
        """
        addresses = sorted(emails or [], key=lambda e: not e.get("primary"))
        avatar_url = user.get("avatar_url")
        return cls(
            id=user.get("id"),
            display_name=user.get("name"),
            emails=[ProfileValue(value=e["email"]) for e in addresses if e.get("email")],
            photos=[ProfileValue(value=avatar_url)] if avatar_url else [],
            email=user.get("email"),
            login=user.get("login"),
            avatar_url=avatar_url,
            location=user.get("location"),
        )
