"""Pet catalog models: pet types and pets."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from petadoption.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, require_text

if TYPE_CHECKING:
    from .adoption import Adoption


class PetStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    ADOPTED = "ADOPTED"
    DISABLED = "DISABLED"


class PetType(PKMixin, ReprMixin, db.Model):
    """Taxonomy entry a pet belongs to (dog, cat, ...)."""

    __tablename__ = "pet_types"

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    __table_args__ = (UniqueConstraint("name", name="uq_pet_types_name"),)

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        return require_text(value, "Pet type name is required.")


class Pet(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Adoptable animal listed by an administrator.

    ``version_id`` is SQLAlchemy's optimistic-lock counter: an UPDATE issued
    against a stale version raises ``StaleDataError`` instead of silently
    overwriting a concurrent status change.
    """

    __tablename__ = "pets"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[PetStatus] = mapped_column(
        Enum(PetStatus, name="pet_status", native_enum=False, length=16),
        nullable=False,
        default=PetStatus.AVAILABLE,
    )
    location: Mapped[str] = mapped_column(String(120), nullable=False)
    type_id: Mapped[int] = mapped_column(
        ForeignKey("pet_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    type: Mapped[PetType] = relationship(lazy="joined", innerjoin=True)
    adoptions: Mapped[list[Adoption]] = relationship(
        back_populates="pet",
        cascade="all, delete-orphan",
    )

    __table_args__ = (CheckConstraint("age >= 0", name="age_non_negative"),)
    __mapper_args__ = {"version_id_col": version_id}

    @validates("name", "location")
    def _require_text(self, key: str, value: str) -> str:
        return require_text(value, f"{key.capitalize()} is required.")

    @validates("age")
    def _validate_age(self, key: str, value: int) -> int:
        if value is None or int(value) < 0:
            raise ValueError("Age must be a non-negative integer.")
        return int(value)

    @property
    def is_available(self) -> bool:
        return self.status == PetStatus.AVAILABLE
