"""Alembic migration environment for the candidate review schema."""

import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import engine_from_config, pool

from alembic import context

# Make candidate_review importable when alembic runs from the repo root
sys.path.insert(0, str(Path(__file__).parent.parent))

from candidate_review import models  # noqa: E402,F401  (registers tables on Base.metadata)
from candidate_review.config import settings  # noqa: E402
from candidate_review.db.base import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# asyncpg query flags and their psycopg2 equivalents
SSL_PARAMS = {
    "ssl=false": "sslmode=disable",
    "ssl=true": "sslmode=require",
    "ssl=require": "sslmode=require",
}


def migration_url() -> str:
    """Runtime DATABASE_URL rewritten for the synchronous psycopg2 driver."""
    url = str(settings.DATABASE_URL)
    if not url.startswith("postgresql+asyncpg://"):
        return url

    url = "postgresql://" + url[len("postgresql+asyncpg://"):]
    base, _, query = url.partition("?")
    if not query:
        return base
    params = [SSL_PARAMS.get(param, param) for param in query.split("&")]
    return f"{base}?{'&'.join(params)}"


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=migration_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a short-lived connection."""
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = migration_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
