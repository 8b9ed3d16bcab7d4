# backend/storefront/tests/test_session.py
from unittest import mock

import pytest
import requests
from rest_framework.test import RequestsClient
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken
from rest_framework_simplejwt.tokens import RefreshToken

from storefront.auth_state import AuthState
from storefront.session import AuthSession, CredentialExchangeError, SessionExpired, extract_error_message


def _response(payload):
    response = mock.Mock()
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.mark.parametrize('payload, expected', [
    ({'error': 'Invalid credentials or inactive account'}, 'Invalid credentials or inactive account'),
    ({'detail': 'Authentication credentials were not provided.'}, 'Authentication credentials were not provided.'),
    ({'email': ['Email already in use'], 'phone': ['Phone number already in use']}, 'Email already in use'),
    ({'non_field_errors': ["Must include 'login', 'email', 'username' or 'phone'"]},
     "Must include 'login', 'email', 'username' or 'phone'"),
    ({'customer_info': {'phone': ['Enter a valid phone number.']}}, 'fallback'),
    ([], 'fallback'),
    (ValueError('not json'), 'fallback'),
])
def test_extract_error_message(payload, expected):
    assert extract_error_message(_response(payload), 'fallback') == expected


@pytest.fixture
def state():
    return AuthState()


@pytest.fixture
def session(db, state):
    return AuthSession(state, 'http://testserver/', http=RequestsClient())


class TestAuthSession:

    def test_claims_the_writer(self, state, session):
        from storefront.auth_state import AuthStateError

        with pytest.raises(AuthStateError):
            state.claim_writer()

    def test_login(self, state, session, user):
        transitions = []
        state.subscribe(transitions.append)

        result = session.login(user.email, 'testpass123')

        assert result['email'] == user.email
        assert state.is_authenticated is True
        assert len(transitions) == 1
        assert session.http.headers['Authorization'] == f'Bearer {session.access_token}'
        assert session.refresh_token

    def test_login_by_phone(self, state, session, user):
        session.login('966500000010', 'testpass123')
        assert state.is_authenticated

    def test_failed_login(self, state, session, user):
        with pytest.raises(CredentialExchangeError) as excinfo:
            session.login(user.email, 'wrongpassword')

        assert excinfo.value.status_code == 401
        assert excinfo.value.message == 'Invalid credentials or inactive account'
        assert state.is_authenticated is False
        assert 'Authorization' not in session.http.headers

    def test_register(self, state, session):
        user = session.register(
            email='new@example.com', username='newcustomer', password='newpass123',
            first_name='New', last_name='Customer',
        )

        assert user['role'] == 'customer'
        assert state.is_authenticated is True

    def test_register_validation_error(self, state, session):
        with pytest.raises(CredentialExchangeError) as excinfo:
            session.register(
                email='new@example.com', username='newcustomer',
                password='newpass123', password_confirm='different1',
            )

        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Password fields didn't match."
        assert state.is_authenticated is False

    def test_unreachable_server(self, state):
        http = mock.Mock()
        http.post.side_effect = requests.ConnectionError('refused')
        session = AuthSession(state, 'http://localhost:1', http=http)

        with pytest.raises(CredentialExchangeError, match='Could not reach the server'):
            session.login('a@example.com', 'secret123')
        assert state.is_authenticated is False

    def test_logout_blacklists_refresh_token(self, state, session, user):
        session.login(user.email, 'testpass123')
        refresh = RefreshToken(session.refresh_token)

        session.logout()

        assert state.is_authenticated is False
        assert session.user is None
        assert 'Authorization' not in session.http.headers
        assert BlacklistedToken.objects.filter(token__jti=refresh['jti']).exists()

    def test_logout_when_api_unreachable(self, state, session, user):
        session.login(user.email, 'testpass123')

        with mock.patch.object(session.http, 'post', side_effect=requests.ConnectionError):
            session.logout()

        assert state.is_authenticated is False
        assert session.access_token is None

    def test_logout_when_anonymous(self, state, session):
        session.logout()
        assert state.is_authenticated is False

    def test_request_with_session(self, session, user):
        session.login(user.email, 'testpass123')

        response = session.request('GET', '/api/users/profile/')

        assert response.status_code == 200
        assert response.json()['user']['email'] == user.email

    def test_expired_session(self, state, session, user):
        session.login(user.email, 'testpass123')
        session.http.headers['Authorization'] = 'Bearer expired'

        with pytest.raises(SessionExpired):
            session.request('GET', '/api/cart/')

        assert state.is_authenticated is False
        assert session.refresh_token is None

    def test_anonymous_401_is_returned(self, state, session):
        response = session.request('GET', '/api/cart/')

        assert response.status_code == 401
        assert state.is_authenticated is False

    def test_restore(self, state, session, user):
        refresh = RefreshToken.for_user(user)

        assert session.restore(str(refresh.access_token), str(refresh)) is True
        assert session.user['email'] == user.email
        assert state.is_authenticated is True

    def test_restore_with_invalid_token(self, state, session):
        assert session.restore('garbage') is False
        assert state.is_authenticated is False
        assert 'Authorization' not in session.http.headers
