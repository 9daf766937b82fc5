"""Tests for login and bearer-token enforcement."""

from datetime import timedelta

import jwt

from conftest import TEST_PASSWORD, TEST_USERNAME
from filenest.core.security import create_access_token


def test_login_success(client):
    response = client.post('/api/login', json={
        'username': TEST_USERNAME,
        'password': TEST_PASSWORD,
    })
    assert response.status_code == 200
    data = response.json()
    assert data['username'] == TEST_USERNAME
    payload = jwt.decode(data['token'], 'test-secret-key-with-enough-length', algorithms=['HS256'])
    assert payload['sub'] == TEST_USERNAME


def test_login_wrong_password(client):
    response = client.post('/api/login', json={
        'username': TEST_USERNAME,
        'password': 'nope',
    })
    assert response.status_code == 401
    assert response.json()['detail'] == 'Invalid credentials'


def test_login_missing_fields_is_bad_request(client):
    response = client.post('/api/login', json={'username': TEST_USERNAME})
    assert response.status_code == 400


def test_protected_route_without_token(client):
    response = client.get('/api/files')
    assert response.status_code == 401
    assert response.json()['detail'] == 'Access token required'


def test_protected_route_with_garbage_token(client):
    response = client.get('/api/files', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 403


def test_protected_route_with_expired_token(client):
    token = create_access_token(TEST_USERNAME, expires_delta=timedelta(seconds=-10))
    response = client.get('/api/files', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 403
    assert response.json()['detail'] == 'Invalid or expired token'


def test_token_signed_with_other_secret_rejected(client):
    forged = jwt.encode({'sub': TEST_USERNAME}, 'another-secret-key-of-some-length', algorithm='HS256')
    response = client.get('/api/notes', headers={'Authorization': f'Bearer {forged}'})
    assert response.status_code == 403


def test_health_is_public(client):
    response = client.get('/health')
    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'running'
    assert data['uploads'] == 'ok'
    assert data['share_index'] == 'ok'
