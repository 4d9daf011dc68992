# tests/test_migrations.py

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from shopsmart.models import Product

ROOT = Path(__file__).resolve().parents[1]


def _alembic_config() -> Config:
    # No ini file: keeps alembic from reconfiguring logging for the rest of the suite
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    return cfg


def test_upgrade_creates_products_table_matching_model(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    cfg = _alembic_config()

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        columns = {c["name"] for c in inspect(engine).get_columns("products")}
        assert columns == {c.name for c in Product.__table__.columns}
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        assert "products" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
