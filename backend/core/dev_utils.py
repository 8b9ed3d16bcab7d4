# =============================================================================
# E-COMMERCE ARCHITECTURE: Development Utilities
# =============================================================================
# STATUS: Opcional - Utilidades para desarrollo
# PURPOSE: Datos de prueba para la tienda (usuarios, catálogo)
# BUSINESS LOGIC: Usado por el comando `seed_store` y en desarrollo local
# =============================================================================

from decimal import Decimal

from django.contrib.auth import get_user_model

User = get_user_model()


def create_test_users():
    """
    Crear un admin y un cliente de prueba
    """

    # Admin user
    admin, created = User.objects.get_or_create(
        email='admin@store.com',
        defaults={
            'username': 'admin',
            'first_name': 'Admin',
            'last_name': 'User',
            'role': 'admin',
            'is_superuser': True,
            'is_staff': True,
        }
    )
    if created:
        admin.set_password('admin12345')
        admin.save()

    # Customer
    customer, created = User.objects.get_or_create(
        email='customer@store.com',
        defaults={
            'username': 'customer1',
            'first_name': 'Customer',
            'last_name': 'One',
            'phone': '+966500000001',
            'role': 'customer',
        }
    )
    if created:
        customer.set_password('customer123')
        customer.save()

    return admin, customer


def create_test_categories():
    """Crear categorías de prueba"""
    from apps.products.models import Category

    categories_data = [
        {'name': 'Indoor Plants', 'name_ar': 'نباتات داخلية', 'description': 'Plants that thrive indoors'},
        {'name': 'Outdoor Plants', 'name_ar': 'نباتات خارجية', 'description': 'Garden and balcony plants'},
        {'name': 'Pots', 'name_ar': 'أصص', 'description': 'Pots and planters'},
        {'name': 'Gifts', 'name_ar': 'هدايا', 'description': 'Ready-made gift boxes'},
    ]

    categories = []
    for cat_data in categories_data:
        category, _ = Category.objects.get_or_create(
            name=cat_data['name'],
            defaults=cat_data
        )
        categories.append(category)

    return categories


def create_test_colors():
    from apps.products.models import Color

    colors_data = [
        ('White', 'أبيض', '#FFFFFF'),
        ('Black', 'أسود', '#000000'),
        ('Green', 'أخضر', '#2E7D32'),
        ('Terracotta', 'تراكوتا', '#E2725B'),
    ]
    return [
        Color.objects.get_or_create(name=name, defaults={'name_ar': name_ar, 'hex_code': hex_code})[0]
        for name, name_ar, hex_code in colors_data
    ]


def create_test_sizes():
    from apps.products.models import Size

    sizes_data = [('Small', 'صغير'), ('Medium', 'متوسط'), ('Large', 'كبير')]
    return [
        Size.objects.get_or_create(name=name, defaults={'name_ar': name_ar, 'sort_order': index})[0]
        for index, (name, name_ar) in enumerate(sizes_data)
    ]


def create_test_products():
    """Crear productos con colores, tallas e imagen principal"""
    from apps.products.models import Product, ProductImage

    categories = {category.name: category for category in create_test_categories()}
    colors = create_test_colors()
    sizes = create_test_sizes()

    products_data = [
        ('Monstera Deliciosa', 'Indoor Plants', Decimal('120.00'), 15, False),
        ('Snake Plant', 'Indoor Plants', Decimal('85.00'), 30, False),
        ('Olive Tree', 'Outdoor Plants', Decimal('450.00'), 5, False),
        ('Ceramic Pot', 'Pots', Decimal('60.00'), 40, False),
        ('Succulent Gift Box', 'Gifts', Decimal('199.00'), 12, True),
    ]

    products = []
    for name, category_name, price, stock, is_gift in products_data:
        product, created = Product.objects.get_or_create(
            name=name,
            defaults={
                'category': categories[category_name],
                'price': price,
                'stock': stock,
                'is_gift': is_gift,
                'description': f'{name} from our nursery',
            }
        )
        if created:
            product.colors.set(colors[:2])
            product.sizes.set(sizes)
            ProductImage.objects.create(
                product=product,
                image=f'products/{product.slug}.jpg',
                alt_text=name,
                is_primary=True,
            )
        products.append(product)

    return products
