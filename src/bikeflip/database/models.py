"""SQLAlchemy models for bikeflip database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Bike(Base):
    """Bike inventory model."""

    __tablename__ = "bikes"

    id = Column(String, primary_key=True, default=_new_id)
    model = Column(String, nullable=False)
    nickname = Column(String, nullable=True)
    status = Column(String, nullable=False, default="In Inventory")
    buy_date = Column(Date, nullable=True)
    buy_price = Column(Numeric(10, 2), nullable=True)
    other_costs = Column(Numeric(10, 2), nullable=True, default=0)
    sell_date = Column(Date, nullable=True)
    sell_price = Column(Numeric(10, 2), nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # No cascade: expenses are unlinked, never deleted with the bike
    expenses = relationship("Expense", back_populates="bike")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=_new_id)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False, default="General")
    amount = Column(Numeric(10, 2), nullable=True)
    paid_by = Column(String, nullable=False, default="Business")
    bike_id = Column(String, ForeignKey("bikes.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    bike = relationship("Bike", back_populates="expenses")


class CapitalEntry(Base):
    """Partner capital movement model."""

    __tablename__ = "capital_entries"

    id = Column(String, primary_key=True, default=_new_id)
    # Linked to partners by name, not by foreign key
    partner_name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Partner(Base):
    """Partner model."""

    __tablename__ = "partners"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
