"""Account operations: registration, login, listing, update and removal.

Every password that reaches storage goes through :func:`_normalize_changes`,
so registration and update share one hash-on-write path.
"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.passwords import hash_password, verify_password
from backend.core.errors import NotFoundError, UnauthorizedError
from backend.models.user import User

logger = logging.getLogger(__name__)

USER_FIELDS = ('name', 'email', 'password')


def _normalize_changes(changes: dict[str, Any]) -> dict[str, Any]:
    normalized = {key: value for key, value in changes.items() if key in USER_FIELDS and value is not None}
    if 'password' in normalized:
        normalized['hashed_password'] = hash_password(normalized.pop('password'))
    return normalized


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError('User not found')
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id.asc()).all()


def register_user(db: Session, name: str, email: str, password: str) -> User:
    user = User(**_normalize_changes({'name': name, 'email': email, 'password': password}))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info('Registered user %s', user.id)
    return user


def login_user(db: Session, email: str, password: str) -> str:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.warning('Login attempt for unknown email')
        raise UnauthorizedError('User not present')

    if not verify_password(password, user.hashed_password):
        logger.warning('Login attempt with wrong password for user %s', user.id)
        raise UnauthorizedError('password wrong')

    return jwt_handler.create_access_token(user.id)


def update_user(db: Session, user_id: int, changes: dict[str, Any]) -> User:
    user = get_user(db, user_id)
    for field, value in _normalize_changes(changes).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info('Updated user %s', user.id)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info('Deleted user %s', user_id)
