import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool

from config.settings import DATABASE_URL

# Configure logging
logger = logging.getLogger(__name__)

IS_SQLITE = DATABASE_URL.startswith("sqlite")

if IS_SQLITE:
    # ==========================================================================
    # SQLite (local development)
    # ==========================================================================
    # check_same_thread=False: FastAPI may hand the session to another thread
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=False,
        future=True
    )
    logger.info("Database mode: SQLite (local development)")
else:
    # ==========================================================================
    # PostgreSQL - small pool, connections verified before use
    # ==========================================================================
    engine = create_engine(
        DATABASE_URL,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
        connect_args={
            "connect_timeout": 10,
            "application_name": "ListingService",
        },
        echo=False,
        pool_reset_on_return='rollback',
        isolation_level="READ_COMMITTED",
        future=True
    )
    logger.info("Database mode: PostgreSQL (QueuePool)")

# Create a session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Define a base class for the models
Base = declarative_base()


def get_db():
    """
    Database dependency: one session per request, always closed.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        # Rollback any pending transaction
        try:
            db.rollback()
        except Exception as rollback_error:
            logger.error(f"Error during rollback: {rollback_error}")
        raise
    finally:
        try:
            db.close()
        except Exception as close_error:
            logger.error(f"Error closing database session: {close_error}")


def check_db_connection():
    """Test database connection - useful for health checks"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except Exception as e:
        logger.error(f"Database connection test failed: {e}")
        return False
