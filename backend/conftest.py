# backend/conftest.py
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.products.models import Category, Color, Product, ProductImage, Size

User = get_user_model()


@pytest.fixture
def api_client():
    """Cliente API para las pruebas"""
    return APIClient()


@pytest.fixture
def user_data():
    """Datos de prueba para crear usuario"""
    return {
        'email': 'test@example.com',
        'username': 'testuser',
        'password': 'testpass123',
        'first_name': 'Test',
        'last_name': 'User',
        'phone': '+966500000010',
        'address': 'Test Address 123',
        'city': 'Riyadh',
    }


@pytest.fixture
def admin_data():
    """Datos de prueba para crear admin"""
    return {
        'email': 'admin@example.com',
        'username': 'adminuser',
        'password': 'adminpass123',
        'first_name': 'Admin',
        'last_name': 'User',
        'role': 'admin',
    }


@pytest.fixture
def user(db, user_data):
    """Usuario de prueba"""
    return User.objects.create_user(**user_data)


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        username='otheruser',
        password='otherpass123',
    )


@pytest.fixture
def admin_user(db, admin_data):
    """Usuario admin de prueba"""
    return User.objects.create_user(**admin_data)


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(api_client, user):
    """Cliente API autenticado"""
    return _authenticate(api_client, user)


@pytest.fixture
def admin_client(api_client, admin_user):
    """Cliente API autenticado como admin"""
    return _authenticate(api_client, admin_user)


# -----Catálogo-----

@pytest.fixture
def category(db):
    return Category.objects.create(name='Indoor Plants', name_ar='نباتات داخلية')


@pytest.fixture
def color(db):
    return Color.objects.create(name='Green', name_ar='أخضر', hex_code='#2e7d32')


@pytest.fixture
def size(db):
    return Size.objects.create(name='M', sort_order=2)


@pytest.fixture
def product(db, category, color, size):
    """Producto activo con stock, un color y una talla"""
    product = Product.objects.create(
        name='Fiddle Leaf Fig',
        name_ar='تين الكمان',
        description='Tall indoor plant',
        category=category,
        price=Decimal('100.00'),
        stock=10,
    )
    product.colors.add(color)
    product.sizes.add(size)
    return product


@pytest.fixture
def product_image(product):
    return ProductImage.objects.create(
        product=product,
        image='products/fiddle-leaf-fig.jpg',
        alt_text='Fiddle Leaf Fig',
        is_primary=True,
    )
