"""
petadoption.services._shared.ports
==================================

*Ports* (hexagonal interfaces) that keep the service layer independent from
concrete infrastructure. Adapters live under ``petadoption.infra``.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for JWT signing and
    decoding.
"""

from __future__ import annotations

from .token_provider import TokenProvider

__all__ = ["TokenProvider"]
