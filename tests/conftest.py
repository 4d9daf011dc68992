import os
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Stable environment for the suite; nothing may leak in from a developer's .env
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")

from shopsmart.core.config import Settings  # noqa: E402
from shopsmart.core.db import Database  # noqa: E402
from shopsmart.main import create_app  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=TEST_DATABASE_URL,
        ENVIRONMENT="test",
        DB_CREATE_ALL=True,
    )


@pytest.fixture()
def database() -> Iterator[Database]:
    """Fresh in-memory database with the schema created."""
    db = Database(TEST_DATABASE_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    yield from database.session()


@pytest.fixture()
def app(settings: Settings, database: Database) -> FastAPI:
    return create_app(settings=settings, database=database)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_product(client: TestClient):
    """POST a product and return the created JSON body."""

    def _make(name: str = "Widget", price=9.99, **extra) -> dict:
        r = client.post("/api/products", json={"name": name, "price": price, **extra})
        assert r.status_code == 201, r.text
        return r.json()

    return _make
