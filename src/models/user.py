"""User model."""

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin


class UserStatus(str, enum.Enum):
    """Account status."""

    ACTIVE = "active"
    BLOCKED = "blocked"
    DELETED = "deleted"


class User(Base, TimestampMixin):
    """Local account, possibly linked to an external identity provider."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    first_name: Mapped[str] = mapped_column(String(255), default="")
    last_name: Mapped[str] = mapped_column(String(255), default="")
    avatar: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    # External identity (None for password accounts)
    provider: Mapped[str | None] = mapped_column(String(50), nullable=True)
    provider_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    verified: Mapped[bool] = mapped_column(default=False)
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, values_callable=lambda e: [m.value for m in e]),
        default=UserStatus.ACTIVE,
    )
    contact: Mapped[str] = mapped_column(String(50), default="")
    location: Mapped[str] = mapped_column(String(255), default="")

    # Hashing lives with the password login flow; OAuth accounts keep None here
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
