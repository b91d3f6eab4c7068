# init_db.py
import logging

from stores_api.database import engine, Base
# Registers the stores table on Base.metadata
from stores_api.db.models import Store  # noqa: F401

logger = logging.getLogger(__name__)


def init_tables(bind=None):
    """Create missing tables; existing tables are left untouched."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Tables created")


def drop_tables(bind=None):
    Base.metadata.drop_all(bind=bind or engine)


if __name__ == "__main__":
    from stores_api.core.config import configure_logging

    configure_logging()
    init_tables()
    print("✅ Tables created")
