"""Booking model definitions."""

from sqlalchemy import Column, Integer
from backend.database import Base


class Booking(Base):
    """Links a user to a flight.

    The references are plain columns rather than foreign keys: deleting a user
    or flight leaves its bookings in place, and readers must tolerate ids that
    no longer resolve.
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    flight_id = Column(Integer, index=True, nullable=False)
