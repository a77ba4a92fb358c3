"""Bookings and the dashboard join.

A booking only stores the two ids. The dashboard resolves them with one bulk
query per entity type and leaves ``None`` where an id no longer resolves.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from backend.core.errors import NotFoundError
from backend.models.booking import Booking
from backend.models.flight import Flight
from backend.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class BookingDetail:
    id: int
    user: User | None
    flight: Flight | None


def ensure_references_exist(db: Session, user_id: int | None, flight_id: int | None) -> None:
    if user_id is not None and db.get(User, user_id) is None:
        raise NotFoundError('User not found')
    if flight_id is not None and db.get(Flight, flight_id) is None:
        raise NotFoundError('Flight not found')


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError('Booking not found')
    return booking


def list_booking_details(db: Session) -> list[BookingDetail]:
    bookings = db.query(Booking).order_by(Booking.id.asc()).all()

    user_ids = {booking.user_id for booking in bookings}
    flight_ids = {booking.flight_id for booking in bookings}

    users_by_id: dict[int, User] = {}
    if user_ids:
        users_by_id = {user.id: user for user in db.query(User).filter(User.id.in_(user_ids)).all()}

    flights_by_id: dict[int, Flight] = {}
    if flight_ids:
        flights_by_id = {flight.id: flight for flight in db.query(Flight).filter(Flight.id.in_(flight_ids)).all()}

    return [
        BookingDetail(
            id=booking.id,
            user=users_by_id.get(booking.user_id),
            flight=flights_by_id.get(booking.flight_id),
        )
        for booking in bookings
    ]


def create_booking(db: Session, user_id: int, flight_id: int) -> Booking:
    ensure_references_exist(db, user_id, flight_id)

    booking = Booking(user_id=user_id, flight_id=flight_id)
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info('Booked flight %s for user %s (booking %s)', flight_id, user_id, booking.id)
    return booking


def update_booking(db: Session, booking_id: int, changes: dict[str, Any]) -> Booking:
    booking = get_booking(db, booking_id)

    user_id = changes.get('user_id')
    flight_id = changes.get('flight_id')
    ensure_references_exist(db, user_id, flight_id)

    if user_id is not None:
        booking.user_id = user_id
    if flight_id is not None:
        booking.flight_id = flight_id

    db.commit()
    db.refresh(booking)
    logger.info('Updated booking %s', booking.id)
    return booking


def delete_booking(db: Session, booking_id: int) -> None:
    booking = get_booking(db, booking_id)
    db.delete(booking)
    db.commit()
    logger.info('Deleted booking %s', booking_id)
