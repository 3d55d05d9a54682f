"""Прогон alembic-миграций на временной sqlite-базе."""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ROOT_DIR = Path(__file__).resolve().parents[1]


def alembic_config() -> Config:
    cfg = Config(str(ROOT_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT_DIR / "vehicle_tracker" / "db" / "alembic"))
    cfg.attributes["configure_logger"] = False
    return cfg


def table_names(db_path: Path) -> set:
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


def test_upgrade_and_downgrade(tmp_path, monkeypatch) -> None:
    """Миграция создает три таблицы с индексами и полностью откатывается."""
    db_path = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    cfg = alembic_config()

    command.upgrade(cfg, "head")
    assert {"users", "vehicles", "fuel_purchases"} <= table_names(db_path)

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        indexes = {index["name"] for index in inspector.get_indexes("fuel_purchases")}
        assert {"idx_fuel_purchases_user_created", "idx_fuel_purchases_vehicle"} <= indexes
        user_columns = {column["name"] for column in inspector.get_columns("users")}
        assert "password_hash" in user_columns
        assert "password" not in user_columns
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")
    assert table_names(db_path) <= {"alembic_version"}
