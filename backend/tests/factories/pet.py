"""Factory Boy definitions for the pet catalog models."""

from __future__ import annotations

import factory

from petadoption.models.pet import Pet, PetStatus, PetType
from tests.factories import BaseFactory


class PetTypeFactory(BaseFactory):
    class Meta:
        model = PetType

    id = None
    name = factory.Sequence(lambda n: f"Type{n}")


class PetFactory(BaseFactory):
    """Build an ``AVAILABLE`` pet of a fresh type."""

    class Meta:
        model = Pet

    id = None
    name = factory.Faker("first_name")
    age = 2
    location = "Madrid"
    status = PetStatus.AVAILABLE
    type = factory.SubFactory(PetTypeFactory)
