"""Flight model definitions."""

from sqlalchemy import Column, Integer, DateTime, Float, String
from backend.database import Base


class Flight(Base):
    """Represents a scheduled flight offered for booking."""
    __tablename__ = "flights"

    id = Column(Integer, primary_key=True, index=True)
    airline = Column(String, nullable=False)
    flight_no = Column(String, nullable=False)
    departure = Column(String, nullable=False)
    arrival = Column(String, nullable=False)
    departure_time = Column(DateTime, nullable=False)
    arrival_time = Column(DateTime, nullable=False)
    seats = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
