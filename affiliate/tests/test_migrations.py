"""Smoke tests for Alembic migrations."""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from affiliate.config import settings


def test_alembic_upgrade_creates_tables(tmp_path: Path, monkeypatch):
    db_path = tmp_path / "affiliate_migrations.db"
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{db_path}")

    repo_root = Path(__file__).resolve().parents[2]
    cfg = Config(str(repo_root / "affiliate" / "alembic.ini"))
    command.upgrade(cfg, "head")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        customer_uniques = inspector.get_unique_constraints("customer")
    finally:
        engine.dispose()

    assert {"workspace", "program", "program_enrollment", "link", "customer", "commission"} <= tables
    assert any(set(u["column_names"]) == {"project_id", "external_id"} for u in customer_uniques)
