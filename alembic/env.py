"""Alembic environment for the users table."""

import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context

# Project root holds the users_api package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from users_api.config import get_settings
from users_api.database import Base, make_engine
from users_api.models.user import User  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = get_settings().DATABASE_URL


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without a database connection."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the migrations to DATABASE_URL."""
    connectable = make_engine(database_url, pooled=False)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
