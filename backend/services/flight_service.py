"""Flight CRUD."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from backend.core.errors import InvalidRecordError, NotFoundError
from backend.models.flight import Flight

logger = logging.getLogger(__name__)

FLIGHT_FIELDS = (
    'airline',
    'flight_no',
    'departure',
    'arrival',
    'departure_time',
    'arrival_time',
    'seats',
    'price',
)


def validate_flight(flight: Flight) -> None:
    if flight.seats is not None and flight.seats < 0:
        raise InvalidRecordError('Seats must not be negative.')
    if flight.price is not None and flight.price < 0:
        raise InvalidRecordError('Price must not be negative.')
    if (
        flight.departure_time is not None
        and flight.arrival_time is not None
        and flight.arrival_time <= flight.departure_time
    ):
        raise InvalidRecordError('Arrival time must be after departure time.')


def list_flights(db: Session) -> list[Flight]:
    return db.query(Flight).order_by(Flight.id.asc()).all()


def get_flight(db: Session, flight_id: int) -> Flight:
    flight = db.get(Flight, flight_id)
    if flight is None:
        raise NotFoundError('Flight not found')
    return flight


def create_flight(db: Session, fields: dict[str, Any]) -> Flight:
    flight = Flight(**{key: value for key, value in fields.items() if key in FLIGHT_FIELDS})
    validate_flight(flight)
    db.add(flight)
    db.commit()
    db.refresh(flight)
    logger.info('Created flight %s (%s)', flight.id, flight.flight_no)
    return flight


def update_flight(db: Session, flight_id: int, changes: dict[str, Any]) -> Flight:
    flight = get_flight(db, flight_id)
    for field, value in changes.items():
        if field in FLIGHT_FIELDS and value is not None:
            setattr(flight, field, value)

    try:
        validate_flight(flight)
    except InvalidRecordError:
        db.rollback()
        raise

    db.commit()
    db.refresh(flight)
    logger.info('Updated flight %s', flight.id)
    return flight


def delete_flight(db: Session, flight_id: int) -> None:
    deleted = db.query(Flight).filter(Flight.id == flight_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info('Deleted flight %s', flight_id)
