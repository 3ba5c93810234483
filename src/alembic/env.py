"""Alembic runs synchronously, so the async driver in DATABASE_URL is swapped
for its blocking counterpart before any engine is built."""

import os
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel

from alembic import context
from src.events_api import models  # noqa: F401 - registers tables on SQLModel.metadata
from src.events_api.core.config import get_settings

_SYNC_DRIVERS = {"postgresql": "postgresql+psycopg2", "sqlite": "sqlite"}

if context.config.config_file_name and os.path.exists(context.config.config_file_name):
    fileConfig(context.config.config_file_name)


def sync_url() -> str:
    url = make_url(get_settings().database_url)
    driver = _SYNC_DRIVERS.get(url.get_backend_name(), url.drivername)
    return url.set(drivername=driver).render_as_string(hide_password=False)


def migrate(**options: object) -> None:
    context.configure(target_metadata=SQLModel.metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    migrate(url=sync_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
else:
    engine = create_engine(sync_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            migrate(connection=connection, compare_type=True)
    finally:
        engine.dispose()
