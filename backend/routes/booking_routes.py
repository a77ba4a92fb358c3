import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import InternalServerError
from backend.database import get_db
from backend.models.booking import Booking
from backend.routes.flight_routes import FlightResponse, MessageResponse
from backend.routes.user_routes import UserResponse
from backend.services import booking_service

router = APIRouter(tags=['booking'])

logger = logging.getLogger(__name__)


class CreateBookingRequest(BaseModel):
    user: int
    flight: int


class UpdateBookingRequest(BaseModel):
    user: int | None = None
    flight: int | None = None


class BookingResponse(BaseModel):
    id: int
    user: int
    flight: int


class BookingCreatedResponse(BaseModel):
    message: str
    booking: BookingResponse


class BookingDetailResponse(BaseModel):
    id: int
    user: UserResponse | None = None
    flight: FlightResponse | None = None


def build_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(id=booking.id, user=booking.user_id, flight=booking.flight_id)


@router.get('/dashboard', response_model=list[BookingDetailResponse])
def booking_dashboard(db: Session = Depends(get_db)):
    try:
        details = booking_service.list_booking_details(db)
    except SQLAlchemyError as exc:
        logger.exception('Failed to build booking dashboard')
        raise InternalServerError() from exc

    return [
        BookingDetailResponse(
            id=detail.id,
            user=UserResponse.model_validate(detail.user) if detail.user is not None else None,
            flight=FlightResponse.model_validate(detail.flight) if detail.flight is not None else None,
        )
        for detail in details
    ]


@router.post('', response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_booking(data: CreateBookingRequest, db: Session = Depends(get_db)):
    try:
        booking = booking_service.create_booking(db, user_id=data.user, flight_id=data.flight)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to create booking')
        raise InternalServerError() from exc

    return BookingCreatedResponse(message='Flight booked', booking=build_booking_response(booking))


@router.patch('/dashboard/{booking_id}', status_code=status.HTTP_204_NO_CONTENT)
def update_booking(booking_id: int, data: UpdateBookingRequest, db: Session = Depends(get_db)):
    changes = data.model_dump(exclude_unset=True)
    try:
        booking_service.update_booking(
            db,
            booking_id,
            {'user_id': changes.get('user'), 'flight_id': changes.get('flight')},
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update booking %s', booking_id)
        raise InternalServerError() from exc


@router.delete('/{booking_id}', response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
def delete_booking(booking_id: int, db: Session = Depends(get_db)):
    try:
        booking_service.delete_booking(db, booking_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to delete booking %s', booking_id)
        raise InternalServerError() from exc

    return MessageResponse(message='Booking deleted')
