"""
Database connection and session management
"""
from sqlalchemy import create_engine, pool
from sqlalchemy.orm import declarative_base, sessionmaker

from jewelbox.config import settings


def _make_engine(url: str):
    if url.startswith("sqlite"):
        # Local development / tests: no pooling options, single shared connection
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=pool.StaticPool,
            echo=settings.DEBUG,
        )
    return create_engine(
        url,
        poolclass=pool.QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=3600,  # Recycle connections after 1 hour
        connect_args={
            "connect_timeout": 10,
            "options": "-c statement_timeout=30000",
        },
        echo=settings.DEBUG,
    )


engine = _make_engine(settings.database_connection_string)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI to get database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
