from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from cosmo_notes.config import SETTINGS

logger = logging.getLogger(__name__)

# shipped inside the package so an installed copy can upgrade its own schema
SCRIPT_LOCATION = Path(__file__).resolve().parents[1] / "migrations"


def alembic_config(database_url: str | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    # configparser interpolation treats % specially
    url = database_url or SETTINGS.database_url
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def run_migrations(database_url: str | None = None) -> None:
    logger.info("Applying database migrations from %s", SCRIPT_LOCATION)
    command.upgrade(alembic_config(database_url), "head")
    logger.info("Database schema is up to date")
