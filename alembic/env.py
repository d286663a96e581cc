"""
Alembic environment — URL and metadata come from the app's database module.
"""
import importlib
from logging.config import fileConfig

from alembic import context

from app.database import Base, engine

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

for module in ('sales_rep', 'rfp', 'prospect', 'client_need', 'need',
               'linkedin_link', 'reference'):
    importlib.import_module(f'app.models.{module}')

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=str(engine.url), target_metadata=target_metadata,
        literal_binds=True, dialect_opts={'paramstyle': 'named'},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
