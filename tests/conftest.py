import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault('JWT_SECRET_KEY', 'test-signing-key-for-the-booking-api-suite')
os.environ.setdefault('BCRYPT_ROUNDS', '4')
os.environ.setdefault('DATABASE_URL', 'sqlite://')

from backend.database import Database  # noqa: E402
from backend.main import create_app  # noqa: E402


@pytest.fixture
def database():
    database = Database('sqlite://')
    database.create_schema()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client
