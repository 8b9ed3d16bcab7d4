# backend/apps/users/tests/test_backends.py
import pytest
from django.contrib.auth import get_user_model
from django.test import RequestFactory

from apps.users.backends import EmailOrUsernameModelBackend

User = get_user_model()


@pytest.mark.django_db
class TestEmailOrUsernameModelBackend:

    @pytest.fixture
    def backend(self):
        """Instancia del backend de autenticación"""
        return EmailOrUsernameModelBackend()

    @pytest.fixture
    def request_factory(self):
        return RequestFactory()

    def authenticate(self, backend, request_factory, **kwargs):
        return backend.authenticate(request=request_factory.post('/login/'), **kwargs)

    def test_authenticate_with_email(self, backend, request_factory, user):
        assert self.authenticate(backend, request_factory, username=user.email, password='testpass123') == user

    def test_email_is_case_insensitive(self, backend, request_factory, user):
        result = self.authenticate(backend, request_factory, username=user.email.upper(), password='testpass123')
        assert result == user

    def test_authenticate_with_username(self, backend, request_factory, user):
        assert self.authenticate(backend, request_factory, username=user.username, password='testpass123') == user

    def test_authenticate_with_phone(self, backend, request_factory, user):
        result = self.authenticate(backend, request_factory, username='966500000010', password='testpass123')
        assert result == user

    def test_authenticate_wrong_password(self, backend, request_factory, user):
        assert self.authenticate(backend, request_factory, username=user.email, password='wrongpassword') is None

    def test_authenticate_nonexistent_user(self, backend, request_factory):
        result = self.authenticate(backend, request_factory, username='nonexistent@example.com', password='x')
        assert result is None

    def test_authenticate_inactive_user(self, backend, request_factory, user):
        """Test autenticación con usuario inactivo"""
        user.is_active = False
        user.save()

        assert self.authenticate(backend, request_factory, username=user.email, password='testpass123') is None

    def test_authenticate_missing_values(self, backend, request_factory, user):
        assert self.authenticate(backend, request_factory, username=None, password='testpass123') is None
        assert self.authenticate(backend, request_factory, username=user.email, password=None) is None

    def test_authenticate_with_kwargs(self, backend, request_factory, user):
        """Simular cuando se pasa email como kwarg"""
        assert self.authenticate(backend, request_factory, email=user.email, password='testpass123') == user

    def test_username_of_one_user_equal_to_email_of_another(self, backend, request_factory, user):
        # el segundo usuario usa como username el email del primero
        other = User.objects.create_user(email='x@example.com', username=user.email, password='otherpass123')

        assert self.authenticate(backend, request_factory, username=user.email, password='testpass123') == user
        assert self.authenticate(backend, request_factory, username=user.email, password='otherpass123') == other
