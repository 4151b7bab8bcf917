from logging.config import fileConfig
from sqlalchemy import create_engine
from alembic import context
import os
import sys

config = context.config


if config.config_file_name is not None:
    fileConfig(config.config_file_name)


sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from booking_api.config import Config
from booking_api.extensions import db
import booking_api.models  # noqa: F401

target_metadata = db.metadata

def get_database_url() -> str:
    """DATABASE_URL from the environment (or .env), else the app's default."""
    return os.getenv("DATABASE_URL") or Config.SQLALCHEMY_DATABASE_URI

def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_database_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    """Run migrations in 'online' mode, batching ALTERs on SQLite."""
    connectable = create_engine(get_database_url())

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
