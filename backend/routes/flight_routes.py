import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, field_validator, model_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import InternalServerError
from backend.database import get_db
from backend.services import flight_service

router = APIRouter(tags=['flight'])

logger = logging.getLogger(__name__)

MAX_SEATS = 2**31 - 1


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Stored timestamps are naive UTC; offset-aware input is converted."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CreateFlightRequest(BaseModel):
    airline: str
    flight_no: str = Field(alias='flightNo')
    departure: str
    arrival: str
    departure_time: datetime = Field(alias='departureTime')
    arrival_time: datetime = Field(alias='arrivalTime')
    seats: int = Field(ge=0, le=MAX_SEATS)
    price: float = Field(ge=0, allow_inf_nan=False)

    class Config:
        populate_by_name = True

    @field_validator('departure_time', 'arrival_time')
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode='after')
    def validate_schedule(self) -> 'CreateFlightRequest':
        if self.arrival_time <= self.departure_time:
            raise ValueError('Arrival time must be after departure time.')
        return self


class UpdateFlightRequest(BaseModel):
    airline: str | None = None
    flight_no: str | None = Field(default=None, alias='flightNo')
    departure: str | None = None
    arrival: str | None = None
    departure_time: datetime | None = Field(default=None, alias='departureTime')
    arrival_time: datetime | None = Field(default=None, alias='arrivalTime')
    seats: int | None = Field(default=None, ge=0, le=MAX_SEATS)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)

    class Config:
        populate_by_name = True

    @field_validator('departure_time', 'arrival_time')
    @classmethod
    def normalize_timestamp(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class FlightResponse(BaseModel):
    id: int
    airline: str
    flight_no: str = Field(alias='flightNo')
    departure: str
    arrival: str
    departure_time: datetime = Field(alias='departureTime')
    arrival_time: datetime = Field(alias='arrivalTime')
    seats: int
    price: float

    class Config:
        from_attributes = True
        populate_by_name = True


class FlightCreatedResponse(BaseModel):
    message: str
    flight: FlightResponse


class FlightDetailResponse(BaseModel):
    flight: FlightResponse = Field(alias='Flight Data')

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    message: str


@router.get('', response_model=list[FlightResponse])
def list_flights(db: Session = Depends(get_db)):
    try:
        flights = flight_service.list_flights(db)
    except SQLAlchemyError as exc:
        logger.exception('Failed to list flights')
        raise InternalServerError() from exc

    return [FlightResponse.model_validate(flight) for flight in flights]


@router.post('', response_model=FlightCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_flight(data: CreateFlightRequest, db: Session = Depends(get_db)):
    try:
        flight = flight_service.create_flight(db, data.model_dump())
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to create flight')
        raise InternalServerError() from exc

    return FlightCreatedResponse(message='Flight added', flight=FlightResponse.model_validate(flight))


@router.get('/{flight_id}', response_model=FlightDetailResponse)
def get_flight(flight_id: int, db: Session = Depends(get_db)):
    try:
        flight = flight_service.get_flight(db, flight_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to load flight %s', flight_id)
        raise InternalServerError() from exc

    return FlightDetailResponse(flight=FlightResponse.model_validate(flight))


@router.patch('/{flight_id}', response_model=FlightResponse)
def update_flight(flight_id: int, data: UpdateFlightRequest, db: Session = Depends(get_db)):
    try:
        flight = flight_service.update_flight(db, flight_id, data.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update flight %s', flight_id)
        raise InternalServerError() from exc

    return FlightResponse.model_validate(flight)


@router.delete('/{flight_id}', response_model=MessageResponse)
def delete_flight(flight_id: int, db: Session = Depends(get_db)):
    try:
        flight_service.delete_flight(db, flight_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to delete flight %s', flight_id)
        raise InternalServerError() from exc

    return MessageResponse(message='Flight Deleted')
