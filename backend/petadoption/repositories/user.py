"""User repository for persistence and credential lookups."""

from __future__ import annotations

from sqlalchemy import select

from petadoption.models.user import User
from petadoption.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER issues tokens or compares passwords; authentication lives in the
    service layer.
    """

    model = User

    def _sortable_fields(self):
        return {"id": User.id, "username": User.username, "created_at": User.created_at}

    def _filterable_fields(self):
        return {"username": User.username, "email": User.email}

    def _updatable_fields(self):
        """Profile fields only; roles and password are never mass-assigned."""
        return {"name", "email", "phone"}

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return self.session.execute(stmt).scalars().first()

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.session.execute(stmt).scalars().first()

    def username_taken(self, username: str) -> bool:
        return self.exists(username=username.strip())

    def email_taken(self, email: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` if another user already owns ``email``."""
        existing = self.get_by_email(email)
        return existing is not None and existing.id != exclude_id
