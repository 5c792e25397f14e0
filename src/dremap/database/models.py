"""SQLAlchemy models for dremap database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    JSON,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class DREMapping(Base):
    """Account code to report category mapping, one row per client and code."""

    __tablename__ = "dre_mappings"

    id = Column(Integer, primary_key=True)
    client_id = Column(String, nullable=False)
    account_code = Column(String, nullable=False)
    account_name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Unique constraint on client_id + account_code
    __table_args__ = (
        UniqueConstraint("client_id", "account_code", name="uq_client_account_code"),
    )


class MonthlyMovement(Base):
    """Twelve monthly amounts of one account in a client's statement."""

    __tablename__ = "monthly_movements"

    id = Column(Integer, primary_key=True)
    client_id = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    statement_type = Column(String, nullable=False)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    level = Column(Integer, default=1, nullable=False)
    category = Column(String, nullable=True)
    # Stored as strings to keep Decimal precision through JSON
    values = Column(JSON, nullable=False)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("ix_movement_period", "client_id", "year", "statement_type"),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
