# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (Azure SQL by default, any URL via DATABASE_URL)
- Session factory for dependency injection
- Connection utilities

Usage:
     from database import get_session, engine

     # In FastAPI routes:
     @app.get("/invoices")
     def list_invoices(db: Session = Depends(get_session)):
          return db.query(Invoice).all()
     """
import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool

from config import settings

logger = logging.getLogger(__name__)


def _create_engine(url: str):
     """Build the engine; SQLite gets NullPool since it has no server side pool."""
     if url.startswith("sqlite"):
          return create_engine(
               url,
               connect_args={"check_same_thread": False},
               poolclass=NullPool,
               echo=settings.SQL_ECHO,
          )
     return create_engine(
          url,
          poolclass=QueuePool,
          pool_size=5,
          max_overflow=10,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
          pool_pre_ping=True,
          echo=settings.SQL_ECHO,  # Log SQL if SQL_ECHO=true
     )


engine = _create_engine(settings.DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Services own their commit points; anything still pending when the
     request finishes is committed here, and any error rolls back.

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()



def check_connection() -> bool:
     """Return True when a trivial query succeeds against the database."""
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception as e:
          logger.error("Database connection failed: %s", e)
          return False
