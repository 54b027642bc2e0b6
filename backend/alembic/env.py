"""Alembic env.py for the cloud mirror tables.

Usage:
  python -m als.cli migrate
  # or, with an alembic.ini pointing script_location here
  alembic upgrade head
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from als.config import settings
from als.database import CloudBase
from als.models import *  # noqa: F401,F403

config = context.config
config.set_main_option("sqlalchemy.url", settings.cloud_database_url_sync)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = CloudBase.metadata


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
