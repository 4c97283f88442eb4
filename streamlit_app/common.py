"""Shared DB helpers for the Streamlit checkout app."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.db.base import Base
from app.utils.time import business_now

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base.metadata.create_all(bind=engine)


def get_session() -> Session:
    return SessionLocal()


def now_string() -> str:
    return business_now().strftime("%Y-%m-%d %H:%M")
