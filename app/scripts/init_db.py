"""
Create all tables directly from the ORM metadata (local SQLite or a scratch database):
  python -m app.scripts.init_db

Use `alembic upgrade head` for PostgreSQL deployments.
"""
import logging
import sys

from app.core.config import get_settings
from app.core.database import engine
from app.core.logging import configure_logging
from app.models import Base

logger = logging.getLogger(__name__)


def main() -> int:
    configure_logging(get_settings().LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
