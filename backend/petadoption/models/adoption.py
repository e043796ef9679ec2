"""Adoption request linking a user to a pet."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from petadoption.core.extensions import db

from .base import PKMixin, ReprMixin
from .pet import Pet
from .user import User


class AdoptionStatus(str, enum.Enum):
    """Status values the workflow writes. The column itself is free-form."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def terminal(cls) -> frozenset[str]:
        return frozenset({cls.APPROVED.value, cls.REJECTED.value})


class Adoption(PKMixin, ReprMixin, db.Model):
    """
    Adoption request owned by exactly one user and referencing one pet.

    ``adoption_date`` is written once; reassigning a different value on a
    persisted row raises ``ValueError``.
    """

    __tablename__ = "adoptions"

    pet_id: Mapped[int] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    adoption_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)

    pet: Mapped[Pet] = relationship(back_populates="adoptions")
    user: Mapped[User] = relationship(back_populates="adoptions")

    __table_args__ = (
        Index("ix_adoptions_pet_id_status", "pet_id", "status"),
        Index("ix_adoptions_user_id", "user_id"),
    )

    @validates("adoption_date")
    def _freeze_adoption_date(self, key: str, value: datetime) -> datetime:
        current = self.__dict__.get("adoption_date")
        if current is not None and self.id is not None and current != value:
            raise ValueError("Adoption date cannot be changed once set.")
        return value

    @validates("status")
    def _normalize_status(self, key: str, value: str) -> str:
        if isinstance(value, AdoptionStatus):
            return value.value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Adoption status cannot be empty.")
        return value.strip()

    @property
    def owner_username(self) -> str | None:
        return self.user.username if self.user is not None else None
