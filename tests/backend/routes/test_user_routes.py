import pytest
from sqlalchemy.exc import OperationalError

from backend.auth import jwt_handler
from backend.services import user_service


def _register(client, name='Ada Lovelace', email='ada@example.com', password='hunter22'):
    return client.post('/api/user/register', json={'name': name, 'email': email, 'password': password})


def test_register_returns_created_user_without_password_hash(client) -> None:
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body['message'] == 'User saved'
    assert body['newUser']['name'] == 'Ada Lovelace'
    assert body['newUser']['email'] == 'ada@example.com'
    assert set(body['newUser']) == {'id', 'name', 'email'}
    assert 'hunter22' not in response.text


def test_register_rejects_missing_password(client) -> None:
    response = client.post('/api/user/register', json={'name': 'Ada', 'email': 'ada@example.com'})

    assert response.status_code == 422
    assert response.json()['message'] == 'Invalid request body'


def test_list_users_wraps_users_and_hides_hashes(client) -> None:
    _register(client, name='Ada', email='ada@example.com')
    _register(client, name='Grace', email='grace@example.com')

    response = client.get('/api/user')

    assert response.status_code == 200
    users = response.json()['users']
    assert [user['name'] for user in users] == ['Ada', 'Grace']
    assert all('password' not in user and 'hashed_password' not in user for user in users)


def test_login_issues_token_bound_to_user(client) -> None:
    user_id = _register(client).json()['newUser']['id']

    response = client.post('/api/user/login', json={'email': 'ada@example.com', 'password': 'hunter22'})

    assert response.status_code == 200
    assert response.json()['message'] == 'User logged in'
    claims = jwt_handler.decode_access_token(response.json()['token'])
    assert claims['sub'] == str(user_id)
    assert claims['userId'] == user_id
    assert claims['exp'] - claims['iat'] == 60 * 60


def test_login_matches_email_case_insensitively(client) -> None:
    _register(client, email='Ada@Example.com')

    response = client.post('/api/user/login', json={'email': 'ADA@example.com', 'password': 'hunter22'})

    assert response.status_code == 200


def test_login_rejects_wrong_password(client) -> None:
    _register(client)

    response = client.post('/api/user/login', json={'email': 'ada@example.com', 'password': 'wrong'})

    assert response.status_code == 401
    assert response.json() == {'message': 'password wrong'}


def test_login_rejects_unknown_email(client) -> None:
    response = client.post('/api/user/login', json={'email': 'nobody@example.com', 'password': 'hunter22'})

    assert response.status_code == 401
    assert response.json() == {'message': 'User not present'}


def test_delete_user_returns_no_content(client) -> None:
    user_id = _register(client).json()['newUser']['id']

    response = client.delete(f'/api/user/{user_id}')

    assert response.status_code == 204
    assert response.content == b''
    assert client.get('/api/user').json()['users'] == []


def test_delete_missing_user_returns_not_found(client) -> None:
    response = client.delete('/api/user/999')

    assert response.status_code == 404
    assert response.json() == {'message': 'User not found'}


def test_update_user_changes_only_supplied_fields(client) -> None:
    user_id = _register(client).json()['newUser']['id']

    response = client.patch(f'/api/user/{user_id}', json={'name': 'Countess Lovelace'})

    assert response.status_code == 204
    user = client.get('/api/user').json()['users'][0]
    assert user == {'id': user_id, 'name': 'Countess Lovelace', 'email': 'ada@example.com'}


def test_update_user_password_is_hashed_and_usable_for_login(client) -> None:
    user_id = _register(client).json()['newUser']['id']

    response = client.patch(f'/api/user/{user_id}', json={'password': 'new-secret'})
    assert response.status_code == 204

    old_login = client.post('/api/user/login', json={'email': 'ada@example.com', 'password': 'hunter22'})
    new_login = client.post('/api/user/login', json={'email': 'ada@example.com', 'password': 'new-secret'})

    assert old_login.status_code == 401
    assert new_login.status_code == 200


def test_update_missing_user_returns_not_found(client) -> None:
    response = client.patch('/api/user/999', json={'name': 'Nobody'})

    assert response.status_code == 404
    assert response.json() == {'message': 'User not found'}


def test_register_storage_failure_returns_internal_error(client, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(db, name, email, password):
        raise OperationalError('INSERT INTO users', {}, Exception('disk I/O error at /var/lib/db'))

    monkeypatch.setattr(user_service, 'register_user', fail)

    response = _register(client)

    assert response.status_code == 500
    assert response.json() == {'message': 'Internal server error'}
    assert '/var/lib/db' not in response.text
