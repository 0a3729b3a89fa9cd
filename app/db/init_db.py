import logging
from typing import Optional

from alembic.config import Config
from alembic import command
from sqlalchemy import inspect

from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger(__name__)

def init_db(alembic_ini: str = "alembic.ini", database_url: Optional[str] = None) -> None:
    """
    Initialize the database by running Alembic migrations.
    """
    try:
        alembic_cfg = Config(alembic_ini)
        if database_url:
            alembic_cfg.set_main_option("sqlalchemy.url", database_url)

        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations applied successfully")
    except Exception as e:
        logger.error(f"Error applying database migrations: {e}")
        raise


def create_all_tables(bind=None):
    """Create any missing tables straight from the model metadata"""
    bind = bind or engine
    existing_tables = inspect(bind).get_table_names()

    Base.metadata.create_all(bind=bind)

    new_tables = set(inspect(bind).get_table_names()) - set(existing_tables)
    if new_tables:
        logger.info(f"Created new tables: {new_tables}")
    return new_tables
