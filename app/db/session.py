from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from app.core.config import settings

logger = logging.getLogger("app")

if not settings.DATABASE_URL:
    logger.error("DATABASE_URL is not set or empty!")
    raise ValueError("DATABASE_URL environment variable is required")

engine_options = {
    "pool_pre_ping": True,  # Check connection before using from pool
    "isolation_level": settings.DB_ISOLATION_LEVEL,
}
if settings.DATABASE_URL.startswith("sqlite"):
    # Sessions are handed between the event loop and worker threads
    engine_options["connect_args"] = {"check_same_thread": False}
    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        # A single shared connection, otherwise every thread sees its own empty database
        engine_options["poolclass"] = StaticPool
else:
    engine_options["pool_recycle"] = 3600  # Recycle connections after 1 hour

try:
    engine = create_engine(settings.DATABASE_URL, **engine_options)
    logger.info(f"Database engine created ({engine.url.get_backend_name()}, isolation {settings.DB_ISOLATION_LEVEL})")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

# Create session factory for database interactions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all SQLAlchemy models
Base = declarative_base()

# Database session dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
