"""
PostgreSQL connection helpers

Two access paths are centralized here:
- psycopg2 direct connections (RealDictCursor) used by every repository
- SQLAlchemy engine + declarative Base, used only to bootstrap the schema
"""
import logging
import time

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# SQLAlchemy Configuration (schema bootstrap)
# ============================================================================

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

Base = declarative_base()


def init_db() -> None:
    """Create any missing tables declared in little_shop.models"""
    # Registers the tables on Base.metadata
    from little_shop import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema verified")


# ============================================================================
# psycopg2 Direct Connections
# ============================================================================

def get_db_connection_dict():
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        Exception if DATABASE_URL is not configured
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise Exception("DATABASE_URL not configured")

    return psycopg2.connect(database_url, cursor_factory=RealDictCursor)


def get_db_connection_dict_with_retry(max_retries=None, retry_delay=None):
    """
    Get a RealDictCursor connection, retrying on connection failures

    Retries use exponential backoff: retry_delay, 2*retry_delay, 4*retry_delay...

    Args:
        max_retries: Maximum number of connection attempts (default: settings.DB_CONNECT_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_RETRY_DELAY)

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
        ValueError: If max_retries is less than 1
    """
    max_retries = settings.DB_CONNECT_RETRIES if max_retries is None else max_retries
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")
    retry_delay = settings.DB_RETRY_DELAY if retry_delay is None else retry_delay

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            return get_db_connection_dict()

        except psycopg2.OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)

    logger.error(f"All {max_retries} connection attempts failed")
    raise last_error

