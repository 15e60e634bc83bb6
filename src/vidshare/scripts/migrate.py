# src/vidshare/scripts/migrate.py
"""Apply Alembic migrations using the application's database settings."""
from __future__ import annotations

import argparse
import logging
import os

from alembic import command
from alembic.config import Config

from vidshare.core.logging import configure_logging
from vidshare.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")


def build_config(database_url: str | None = None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", os.path.abspath(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.effective_database_url)
    return cfg


def run_upgrade(revision: str = "head", database_url: str | None = None) -> None:
    """Upgrade the schema to ``revision``."""
    logger.info("Upgrading database to %s", revision)
    command.upgrade(build_config(database_url), revision)


def main(argv: list[str] | None = None) -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Run VidShare database migrations")
    parser.add_argument("revision", nargs="?", default="head")
    args = parser.parse_args(argv)
    run_upgrade(args.revision)


if __name__ == "__main__":
    main()
