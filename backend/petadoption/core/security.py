"""Signing key loading and secret comparison helpers."""

from __future__ import annotations

import hmac
import logging
from pathlib import Path

from flask import Flask

log = logging.getLogger(__name__)


def _read_pem(app: Flask, path_value: str | None) -> str | None:
    """Read a PEM file, resolving relative paths against the app root."""
    if not path_value:
        return None
    path = Path(path_value)
    if not path.is_absolute():
        path = Path(app.root_path).parent / path
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def init_app(app: Flask) -> None:
    """Load the RSA key pair into ``JWT_PRIVATE_KEY``/``JWT_PUBLIC_KEY`` once.

    Inline PEM values already present in the config win over key files. A
    verifier-only deployment may ship the public key alone; issuing tokens then
    fails with a wrapped signing error instead of at start-up.
    """
    for key_name, path_name in (
        ("JWT_PRIVATE_KEY", "JWT_PRIVATE_KEY_PATH"),
        ("JWT_PUBLIC_KEY", "JWT_PUBLIC_KEY_PATH"),
    ):
        if app.config.get(key_name):
            continue
        pem = _read_pem(app, app.config.get(path_name))
        if pem is None:
            log.warning("%s not configured", key_name)
            continue
        app.config[key_name] = pem

    if not app.config.get("JWT_PUBLIC_KEY"):
        log.warning("JWT_PUBLIC_KEY missing: bearer tokens cannot be verified")


def secrets_match(provided: str | None, expected: str | None) -> bool:
    """Compare two secrets in constant time.

    Returns ``False`` when either side is missing so an unset server secret can
    never be matched by an empty client value.
    """
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))
