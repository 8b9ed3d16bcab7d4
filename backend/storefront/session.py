"""
Subsistema de autenticación del cliente.

AuthSession es el único writer del AuthState: intercambia credenciales con
la API (JWT), guarda los tokens y marca la sesión como autenticada o anónima.
"""

import logging

import requests

logger = logging.getLogger(__name__)


class CredentialExchangeError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpired(CredentialExchangeError):
    """La API respondió 401 a una petición autenticada"""


class ApiRequestError(Exception):
    """Respuesta de error de un endpoint de la tienda (carrito, favoritos...)"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_error_message(response, default):
    """Primer mensaje legible del cuerpo de error de la API"""
    try:
        data = response.json()
    except ValueError:
        return default

    if isinstance(data, dict):
        for key in ('error', 'detail', 'message'):
            value = data.get(key)
            if isinstance(value, dict):
                value = next(iter(value.values()), None)
            if isinstance(value, list):
                value = value[0] if value else None
            if value:
                return str(value)
        # errores de validación por campo: {'email': ['...']}
        for value in data.values():
            if isinstance(value, list) and value:
                return str(value[0])
            if isinstance(value, str) and value:
                return value
    elif isinstance(data, list) and data:
        return str(data[0])
    return default


class AuthSession:
    LOGIN_PATH = '/api/users/login/'
    REGISTER_PATH = '/api/users/register/'
    LOGOUT_PATH = '/api/users/logout/'
    PROFILE_PATH = '/api/users/profile/'

    def __init__(self, auth_state, base_url, http=None, timeout=10):
        self._writer = auth_state.claim_writer()
        self.auth_state = auth_state
        self.base_url = base_url.rstrip('/')
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout
        self.user = None
        self.access_token = None
        self.refresh_token = None

    @property
    def is_authenticated(self):
        return self.auth_state.is_authenticated

    def url(self, path):
        return f"{self.base_url}{path}"

    def login(self, login, password):
        data = self._exchange(
            self.LOGIN_PATH,
            {'login': login, 'password': password},
            default_error='Login failed. Please check your credentials.',
        )
        self._start(data)
        logger.info("Signed in as %s", self.user.get('email'))
        return self.user

    def register(self, **fields):
        payload = dict(fields)
        payload.setdefault('password_confirm', payload.get('password'))
        data = self._exchange(
            self.REGISTER_PATH,
            payload,
            default_error='Registration failed. Please try again.',
        )
        self._start(data)
        logger.info("Registered and signed in as %s", self.user.get('email'))
        return self.user

    def restore(self, access_token, refresh_token=None):
        """Reanuda una sesión guardada; devuelve False si los tokens ya no valen"""
        self._set_tokens(access_token, refresh_token)
        try:
            response = self.http.get(self.url(self.PROFILE_PATH), timeout=self.timeout)
        except requests.RequestException as exc:
            self._clear_tokens()
            raise CredentialExchangeError('Could not reach the server.') from exc

        if not response.ok:
            self._clear_tokens()
            return False
        self.user = response.json()['user']
        self._writer.set_authenticated()
        return True

    def logout(self):
        """Cierra la sesión local siempre; el blacklist en la API es best-effort"""
        refresh_token = self.refresh_token
        try:
            if refresh_token and self.is_authenticated:
                response = self.http.post(
                    self.url(self.LOGOUT_PATH),
                    json={'refresh': refresh_token},
                    timeout=self.timeout,
                )
                if not response.ok:
                    logger.warning("Logout was not acknowledged by the API (%s)", response.status_code)
        except requests.RequestException:
            logger.warning("Could not reach the API to revoke the refresh token", exc_info=True)
        finally:
            self._end()

    def request(self, method, path, **kwargs):
        """Petición autenticada; un 401 con sesión activa se trata como sesión expirada"""
        kwargs.setdefault('timeout', self.timeout)
        response = self.http.request(method, self.url(path), **kwargs)
        if response.status_code == 401 and self.is_authenticated:
            logger.info("Session expired (%s %s)", method, path)
            self._end()
            raise SessionExpired('Your session has expired. Please sign in again.', 401)
        return response

    def call_json(self, method, path, payload=None, error_class=ApiRequestError, default_error='Request failed.'):
        kwargs = {'json': payload} if payload is not None else {}
        response = self.request(method, path, **kwargs)
        if not response.ok:
            raise error_class(extract_error_message(response, default_error), response.status_code)
        return response.json()

    def _exchange(self, path, payload, default_error):
        try:
            response = self.http.post(self.url(path), json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CredentialExchangeError('Could not reach the server.') from exc

        if not response.ok:
            raise CredentialExchangeError(
                extract_error_message(response, default_error),
                response.status_code,
            )
        return response.json()

    def _set_tokens(self, access_token, refresh_token):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.http.headers['Authorization'] = f'Bearer {access_token}'

    def _clear_tokens(self):
        self.access_token = None
        self.refresh_token = None
        self.http.headers.pop('Authorization', None)

    def _start(self, data):
        self._set_tokens(data['access'], data.get('refresh'))
        self.user = data.get('user')
        self._writer.set_authenticated()

    def _end(self):
        self._clear_tokens()
        self.user = None
        self._writer.set_anonymous()
