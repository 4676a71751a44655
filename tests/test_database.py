"""Tests for database session management and migration configuration."""

from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from hereoz_backend.core.custom_types import clean_string_list
from hereoz_backend.core.database import DatabaseManager, build_engine
from hereoz_backend.core.migration import PROJECT_ROOT, MigrationManager
from tests.conftest import create_user


class TestDatabaseManager:

    def test_lifecycle(self):
        manager = DatabaseManager("sqlite://")
        assert manager.health_check() is False

        manager.initialize()
        assert manager.health_check() is True

        with manager.get_session() as session:
            assert session.execute(text("SELECT 1")).scalar() == 1

        manager.close()
        assert manager.engine is None
        assert manager.health_check() is False

    def test_session_rolls_back_on_error(self):
        manager = DatabaseManager("sqlite://")

        with pytest.raises(RuntimeError):
            with manager.get_session():
                raise RuntimeError("boom")

        manager.close()


class TestMigrationManager:

    def test_missing_config(self, tmp_path):
        manager = MigrationManager(str(tmp_path / "alembic.ini"))

        with pytest.raises(FileNotFoundError):
            manager.run_migrations()

    def test_script_location_resolved_from_project_root(self):
        config = MigrationManager()._get_alembic_config()

        assert Path(config.get_main_option("script_location")) == PROJECT_ROOT / "alembic"
        assert (PROJECT_ROOT / "alembic" / "versions" / "001_initial_schema.py").exists()


class TestEngineAndTypes:

    def test_in_memory_sqlite_shares_one_connection(self):
        engine = build_engine("sqlite://")
        assert isinstance(engine.pool, StaticPool)
        engine.dispose()

    def test_clean_string_list(self):
        assert clean_string_list(None) is None
        assert clean_string_list([" Python ", "python", "", "SQL"]) == ["Python", "SQL"]

    def test_string_list_column(self, db_session):
        user = create_user(db_session, "lists@example.com", skills=[" Go ", "go", "Rust"])
        bare = create_user(db_session, "bare@example.com")
        db_session.expire_all()

        assert user.skills == ["Go", "Rust"]
        assert bare.languages == []
