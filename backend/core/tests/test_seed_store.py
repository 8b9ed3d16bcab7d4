# backend/core/tests/test_seed_store.py
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.products.models import Category, Product

User = get_user_model()


@pytest.mark.django_db
class TestSeedStoreCommand:

    def test_seeds_users_and_catalog(self):
        out = StringIO()

        call_command('seed_store', stdout=out)

        assert User.objects.get(email='admin@store.com').is_admin
        customer = User.objects.get(email='customer@store.com')
        assert customer.check_password('customer123')
        assert Category.objects.count() == 4
        assert Product.objects.active().count() == 5
        assert all(product.primary_image for product in Product.objects.all())
        assert 'Catalog ready: 5 products' in out.getvalue()

    def test_is_idempotent(self):
        call_command('seed_store', stdout=StringIO())
        call_command('seed_store', stdout=StringIO())

        assert User.objects.count() == 2
        assert Product.objects.count() == 5

    def test_no_users(self):
        call_command('seed_store', '--no-users', stdout=StringIO())

        assert not User.objects.exists()
        assert Product.objects.count() == 5

    def test_seeded_customer_can_log_in_by_phone(self, api_client):
        call_command('seed_store', stdout=StringIO())

        response = api_client.post('/api/users/login/', {'login': '+966500000001', 'password': 'customer123'})

        assert response.status_code == 200
