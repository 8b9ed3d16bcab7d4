# backend/apps/products/tests/test_context_processors.py
import pytest
from django.test import RequestFactory

from apps.products.context_processors import shared_categories
from apps.products.models import Category


@pytest.mark.django_db
def test_shared_categories_only_active(category, django_assert_num_queries):
    Category.objects.create(name='Hidden', is_active=False)

    context = shared_categories(RequestFactory().get('/'))

    # la consulta se hace al usarlas
    with django_assert_num_queries(1):
        names = [item['name'] for item in context['categories']]
    assert names == ['Indoor Plants']
