"""User and role models for the adoption backend."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from petadoption.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, require_text

if TYPE_CHECKING:
    from .adoption import Adoption

ROLE_PREFIX = "ROLE_"
ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"

EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.[A-Za-z]{2,}$")


class UserRole(db.Model):
    """Role granted to a user, stored with its ``ROLE_`` prefix."""

    __tablename__ = "user_roles"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role: Mapped[str] = mapped_column(String(32), primary_key=True)

    def __repr__(self) -> str:
        return f"<UserRole user_id={self.user_id} role={self.role}>"


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account that can request adoptions.

    Fields
    ------
    username : str
        Login name, unique, trimmed.
    email : str
        Contact email, unique, stored lowercase.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    name, phone : str
        Required, non-blank profile fields.
    roles : set[str]
        Read-only view over ``role_links`` (``ROLE_ADMIN`` / ``ROLE_USER``).
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)

    role_links: Mapped[list[UserRole]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    adoptions: Mapped[list[Adoption]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_username", "username"),
    )

    # -------------------- Roles --------------------
    @property
    def roles(self) -> set[str]:
        return {link.role for link in self.role_links}

    def grant_role(self, role: str) -> None:
        """Attach ``role`` (prefixed form) unless already granted."""
        role = role if role.startswith(ROLE_PREFIX) else f"{ROLE_PREFIX}{role}"
        if role not in self.roles:
            self.role_links.append(UserRole(role=role))

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.roles

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """Return ``True`` when ``raw`` matches the stored hash."""
        if not self.password_hash or not raw:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        v = require_text(value, "Email is required.").lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        return require_text(value, "Username is required.")

    @validates("name", "phone")
    def _require_profile_text(self, key: str, value: str) -> str:
        return require_text(value, f"{key.capitalize()} is required.")
