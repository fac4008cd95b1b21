from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool
from freshbox.core.config import settings
import logging

logger = logging.getLogger("database")


def build_engine(url: str):
    if url.startswith("sqlite"):
        # Local development; tests build their own in-memory engine
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,              # Validate connections
        pool_recycle=3600,               # Recycle every hour
        echo=False,
        connect_args={
            "options": "-c timezone=utc",
            "application_name": "freshbox_api"
        }
    )


engine = build_engine(settings.DATABASE_URL)

@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection, connection_record):
    logger.info("DB connection established")

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()
