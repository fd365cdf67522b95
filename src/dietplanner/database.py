"""Database configuration and session management for persisted preferences."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Engine, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Preference(Base):
    """A named value saved on behalf of the host application."""

    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)


def create_preferences_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for the preferences database and ensure its tables exist."""
    engine = create_engine(url, echo=echo)
    Base.metadata.create_all(engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to an engine."""
    return sessionmaker(engine, expire_on_commit=False)
