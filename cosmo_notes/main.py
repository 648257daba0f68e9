from __future__ import annotations

import logging
import sys

import uvicorn

from cosmo_notes.api.app import create_app
from cosmo_notes.config import SETTINGS
from cosmo_notes.infra.db import init_db
from cosmo_notes.infra.logging import setup_logging
from cosmo_notes.infra.migrations import run_migrations

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    try:
        init_db()
        run_migrations()
    except Exception:  # noqa: BLE001
        logger.exception("Database is not reachable at startup")
        sys.exit(1)

    app = create_app()
    uvicorn.run(app, host=SETTINGS.api_host, port=SETTINGS.api_port, log_config=None)


if __name__ == "__main__":
    main()
