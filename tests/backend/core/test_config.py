import pytest
from fastapi.testclient import TestClient

from backend.core import config
from backend.main import create_app


def test_validate_runtime_config_requires_signing_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', '')

    with pytest.raises(RuntimeError, match='JWT_SECRET_KEY'):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_out_of_range_rounds(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'BCRYPT_ROUNDS', 2)

    with pytest.raises(RuntimeError, match='BCRYPT_ROUNDS'):
        config.validate_runtime_config()


def test_app_refuses_to_start_without_signing_key(database, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', '')

    with pytest.raises(RuntimeError):
        with TestClient(create_app(database)):
            pass


def test_root_returns_welcome_message(client) -> None:
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'message': 'Welcome to Air Ticket Booking'}
