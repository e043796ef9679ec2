from __future__ import annotations

from petadoption.services._shared.principal import Principal


def is_owner(*, actor: str | None, owner: str | None) -> bool:
    """Return True if the actor owns the resource."""
    return actor is not None and owner is not None and actor == owner


def is_admin_or_owner(principal: Principal, owner_username: str | None) -> bool:
    """Return True if ``principal`` is an administrator or owns the resource."""
    if principal.is_admin:
        return True
    return is_owner(actor=principal.username, owner=owner_username)
