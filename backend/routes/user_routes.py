import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import InternalServerError
from backend.database import get_db
from backend.services import user_service

router = APIRouter(tags=['user'])

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def clean_email(value: str) -> str:
    normalized = value.strip().lower()
    if not normalized:
        raise ValueError('Email is required.')
    return normalized


def check_password(value: str) -> str:
    if not value:
        raise ValueError('Password is required.')
    if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValueError(f'Password must be {MAX_PASSWORD_BYTES} bytes or fewer.')
    return value


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return clean_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return clean_email(value)


class UpdateUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return clean_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return check_password(value)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    users: list[UserResponse]


class RegisterResponse(BaseModel):
    message: str
    new_user: UserResponse = Field(alias='newUser')

    class Config:
        populate_by_name = True


class LoginResponse(BaseModel):
    message: str
    token: str


@router.get('', response_model=UserListResponse)
def list_users(db: Session = Depends(get_db)):
    try:
        users = user_service.list_users(db)
    except SQLAlchemyError as exc:
        logger.exception('Failed to list users')
        raise InternalServerError() from exc

    return UserListResponse(users=[UserResponse.model_validate(user) for user in users])


@router.post('/register', response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = user_service.register_user(db, name=data.name, email=data.email, password=data.password)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to register user')
        raise InternalServerError() from exc

    return RegisterResponse(message='User saved', new_user=UserResponse.model_validate(user))


@router.post('/login', response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        token = user_service.login_user(db, email=data.email, password=data.password)
    except SQLAlchemyError as exc:
        logger.exception('Failed to log in user')
        raise InternalServerError() from exc

    return LoginResponse(message='User logged in', token=token)


@router.delete('/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    try:
        user_service.delete_user(db, user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to delete user %s', user_id)
        raise InternalServerError() from exc


@router.patch('/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
def update_user(user_id: int, data: UpdateUserRequest, db: Session = Depends(get_db)):
    try:
        user_service.update_user(db, user_id, data.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update user %s', user_id)
        raise InternalServerError() from exc
