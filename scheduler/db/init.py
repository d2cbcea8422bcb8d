"""Initialize database tables."""
from sqlmodel import SQLModel
from sqlalchemy.engine import Engine

from scheduler.models.task import Task  # noqa: F401  registers the table
from scheduler.utils.logger import get_logger

logger = get_logger(__name__)


def init_db(engine: Engine):
    """Install the schema on first run; existing tables are left alone."""
    SQLModel.metadata.create_all(engine)
    logger.info("Database schema ready", url=str(engine.url))
