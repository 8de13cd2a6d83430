from logging.config import fileConfig
import os
from sqlalchemy import engine_from_config, pool
from alembic import context

from storefront.db import Base, normalize_url
from storefront import models  # noqa: F401  (registers tables on Base)

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

# revisions are hand-written; metadata is only used by --autogenerate diffs
target_metadata = Base.metadata

def database_url() -> str:
    """DATABASE_URL wins over alembic.ini; both fall back to the local SQLite file."""
    return normalize_url(os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url"))

def run_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=database_url().startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()

def run_online() -> None:
    url = database_url()
    connectable = engine_from_config({"url": url}, prefix="", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite cannot ALTER most constraints in place
            render_as_batch=url.startswith("sqlite"),
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_offline()
else:
    run_online()
