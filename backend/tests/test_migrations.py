"""
Tests for the Alembic migrations on a throwaway SQLite database.
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from app.core.config import get_settings

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


@pytest.fixture
def sqlite_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setattr(get_settings(), "DATABASE_URL_SYNC", url)
    return url


def _alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    return config


def test_upgrade_skips_postgres_only_constraint_on_sqlite(sqlite_url):
    command.upgrade(_alembic_config(), "head")

    engine = create_engine(sqlite_url)
    try:
        inspector = inspect(engine)
        assert {"users", "spots", "spot_images", "reviews", "review_images", "bookings"} <= set(
            inspector.get_table_names()
        )
        assert "ix_bookings_spot_start" in {ix["name"] for ix in inspector.get_indexes("bookings")}
    finally:
        engine.dispose()


def test_downgrade_drops_everything(sqlite_url):
    config = _alembic_config()
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(sqlite_url)
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
