# src/clip_feed/scripts/migrate.py
"""Apply Alembic migrations up to head."""
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from clip_feed.core.settings import settings

_MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def run_upgrade_head() -> None:
    """Upgrade the configured database to the latest revision."""
    cfg = Config(os.path.join(_MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    cfg.set_main_option("script_location", _MIGRATIONS_DIR)
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
