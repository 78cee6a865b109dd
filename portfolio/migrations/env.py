# portfolio/migrations/env.py
from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# -------------------------------------------------------------------
# Make the project root importable so "import portfolio.XXX" works
# when running Alembic from the repository root.
# This file lives at portfolio/migrations/env.py, so go up two levels.
# -------------------------------------------------------------------
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

# config loads portfolio/.env and resolves relative SQLite paths
from portfolio.config import DATABASE_URL
from portfolio.database import Base

# Side-effect import: registers tables on Base.metadata
import portfolio.models  # noqa: F401

config = context.config

# ALEMBIC_DATABASE_URL wins so migrations can run with a privileged role
env_url = os.getenv("ALEMBIC_DATABASE_URL") or DATABASE_URL or config.get_main_option("sqlalchemy.url")
if not env_url:
    raise RuntimeError("No database URL found. Set ALEMBIC_DATABASE_URL or DATABASE_URL.")
config.set_main_option("sqlalchemy.url", env_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

VERSION_TABLE = os.getenv("ALEMBIC_VERSION_TABLE", "alembic_version")

# SQLite needs batch mode for ALTER TABLE
is_sqlite = env_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (no DB connection)."""
    context.configure(
        url=env_url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        version_table=VERSION_TABLE,
        render_as_batch=is_sqlite,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with DB connection)."""
    section = config.get_section(config.config_ini_section) or {}
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            version_table=VERSION_TABLE,
            render_as_batch=is_sqlite,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
