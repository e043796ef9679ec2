"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a top-level transaction on a shared in-memory SQLite
connection. The ORM session joins it through SAVEPOINTs, so service-level
``commit()``/``rollback()`` calls behave normally while nothing leaks between
cases.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask, g
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import scoped_session, sessionmaker

from petadoption.cli.keys import generate_key_pair
from petadoption.core.config import TestingConfig
from petadoption.core.extensions import db as _db
from petadoption.factory import create_app

_PRIVATE_PEM, _PUBLIC_PEM = generate_key_pair()


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Signs tokens with a throwaway RSA key pair generated per test session.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_PRIVATE_KEY = _PRIVATE_PEM.decode("utf-8")
    JWT_PUBLIC_KEY = _PUBLIC_PEM.decode("utf-8")
    LOG_LEVEL = "WARNING"


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """Let pysqlite honour SAVEPOINT by emitting BEGIN ourselves."""

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, _record):  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def app() -> Generator[Flask, None, None]:
    """Create the Flask application and keep an app context pushed.

    Requests made through the test client reuse this context, so the
    transactional session below stays in place across requests.
    """
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture(scope="session")
def db(app: Flask) -> Generator[Any, None, None]:
    """Create database tables once per test session."""
    _enable_sqlite_savepoints(_db.engine)
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def session(db, connection):
    """Provide a scoped session bound to a per-test outer transaction.

    ``join_transaction_mode="create_savepoint"`` makes every session-level
    commit release a SAVEPOINT and every rollback return to it; the outer
    transaction is rolled back when the test ends. ``expire_on_commit`` is
    off so factory objects stay readable after services commit.
    """
    outer = connection.begin()
    factory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
    )
    scoped = scoped_session(factory)

    original_session = db.session
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def client(app: Flask, session):
    """Flask test client sharing the transactional session.

    The app context outlives single requests, so per-request values left in
    ``g`` by a previous test are dropped first.
    """
    for key in ("request_id", "principal"):
        g.pop(key, None)
    return app.test_client()


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)


# -- Accounts and bearer headers -----------------------------------------------
@pytest.fixture()
def user():
    """Regular account (``ROLE_USER``) with the factory default password."""
    from tests.factories.user import UserFactory

    return UserFactory(username="alice")


@pytest.fixture()
def admin():
    """Administrator account (``ROLE_ADMIN``)."""
    from tests.factories.user import AdminFactory

    return AdminFactory(username="root")


@pytest.fixture()
def user_headers(user) -> dict[str, str]:
    from tests.helpers.auth import issue_token
    from tests.helpers.http import json_headers

    return json_headers(issue_token(user.username, user.roles))


@pytest.fixture()
def admin_headers(admin) -> dict[str, str]:
    from tests.helpers.auth import issue_token
    from tests.helpers.http import json_headers

    return json_headers(issue_token(admin.username, admin.roles))
