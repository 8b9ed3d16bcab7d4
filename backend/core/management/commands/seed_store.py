from django.core.management.base import BaseCommand
from django.db import transaction

from core.dev_utils import create_test_products, create_test_users


class Command(BaseCommand):
    help = "Seed the database with demo users, categories, colors, sizes and products"

    def add_arguments(self, parser):
        parser.add_argument(
            '--no-users',
            action='store_true',
            help="Only seed the catalog",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if not options['no_users']:
            admin, customer = create_test_users()
            self.stdout.write(f"Users: {admin.email}, {customer.email}")

        products = create_test_products()
        self.stdout.write(self.style.SUCCESS(f"Catalog ready: {len(products)} products"))
