"""Alembic integration: locate the migration scripts and apply them."""

from pathlib import Path

from alembic import command
from alembic.config import Config
import structlog

logger = structlog.get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class MigrationManager:
    """Applies the revisions under `alembic/` to the configured database."""

    def __init__(self, alembic_cfg_path: str = str(PROJECT_ROOT / "alembic.ini")) -> None:
        self.alembic_cfg_path = Path(alembic_cfg_path)
        self._config = None

    def _get_alembic_config(self) -> Config:
        """Load alembic.ini with `script_location` anchored at the project root.

        Raises:
            FileNotFoundError: If alembic.ini is missing
        """
        if self._config is None:
            if not self.alembic_cfg_path.is_file():
                raise FileNotFoundError(f"Alembic config file not found: {self.alembic_cfg_path}")

            config = Config(str(self.alembic_cfg_path))
            script_location = config.get_main_option("script_location") or "alembic"
            config.set_main_option("script_location", str(PROJECT_ROOT / script_location))
            self._config = config

        return self._config

    def run_migrations(self, revision: str = "head") -> None:
        config = self._get_alembic_config()
        logger.info("Applying database migrations", target=revision)
        command.upgrade(config, revision)
        logger.info("Database migrations applied", target=revision)


migration_manager = MigrationManager()


def init_database() -> None:
    """Open the engine and bring the schema up to the latest revision."""
    from .database import db_manager

    db_manager.initialize()
    migration_manager.run_migrations()
