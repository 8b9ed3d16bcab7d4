from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone, translation
from django.utils.text import slugify

# =============================================================================
# E-COMMERCE ARCHITECTURE: Product Catalog
# =============================================================================
# STATUS: Completo
# PURPOSE: Catálogo de la tienda con variantes de color y talla
# BUSINESS LOGIC:
# - Products: activos/inactivos, precio con descuento por fechas
# - Categories, Colors & Sizes: organizan y filtran productos
# - Images: imagen principal + galería ordenada
# =============================================================================


def unique_slugify(instance, value, max_length=200):
    """Genera un slug único para el modelo de `instance` (agrega -2, -3...)"""
    base = slugify(value)[:max_length] or 'item'
    slug = base
    model = type(instance)
    counter = 2
    while model.objects.filter(slug=slug).exclude(pk=instance.pk).exists():
        suffix = f'-{counter}'
        slug = f'{base[:max_length - len(suffix)]}{suffix}'
        counter += 1
    return slug


class LocalizedNameMixin:
    """Elige name_ar cuando el idioma activo es árabe"""

    @property
    def display_name(self):
        language = translation.get_language() or ''
        if language.startswith('ar') and self.name_ar:
            return self.name_ar
        return self.name


#-----Category Model-----
class Category(LocalizedNameMixin, models.Model):
    name = models.CharField(max_length=100, unique=True)
    name_ar = models.CharField(max_length=100, blank=True)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        ordering = ['name']

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slugify(self, self.name, max_length=100)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


#-----Color Model-----
hex_color_validator = RegexValidator(
    regex=r'^#[0-9A-Fa-f]{6}$',
    message="Hex code must look like #RRGGBB",
)


class Color(LocalizedNameMixin, models.Model):
    name = models.CharField(max_length=50, unique=True)
    name_ar = models.CharField(max_length=50, blank=True)
    hex_code = models.CharField(max_length=7, validators=[hex_color_validator])
    icon = models.CharField(max_length=255, blank=True, help_text="Ruta o URL del ícono")

    class Meta:
        ordering = ['name']

    def save(self, *args, **kwargs):
        self.hex_code = self.hex_code.upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.hex_code})"


#-----Size Model-----
class Size(LocalizedNameMixin, models.Model):
    name = models.CharField(max_length=50, unique=True)
    name_ar = models.CharField(max_length=50, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name


class ProductQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True, category__is_active=True)

    def gifts(self):
        return self.filter(is_gift=True)


#-----Product Model-----
class Product(LocalizedNameMixin, models.Model):
    # Información básica
    name = models.CharField(max_length=200)
    name_ar = models.CharField(max_length=200, blank=True)
    slug = models.SlugField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    description_ar = models.TextField(blank=True)
    category = models.ForeignKey(Category, related_name='products', on_delete=models.CASCADE)
    colors = models.ManyToManyField(Color, related_name='products', blank=True)
    sizes = models.ManyToManyField(Size, related_name='products', blank=True)

    # Precio y descuento por rango de fechas
    price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    discount_from = models.DateTimeField(null=True, blank=True)
    discount_to = models.DateTimeField(null=True, blank=True)

    # Inventario y visibilidad
    stock = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    is_gift = models.BooleanField(default=False)

    # Métricas
    views_count = models.PositiveIntegerField(default=0)
    sales_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = "Product"
        verbose_name_plural = "Products"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'is_gift']),
            models.Index(fields=['category', 'is_active']),
        ]

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slugify(self, self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name

    @property
    def has_discount(self):
        """Descuento vigente: precio rebajado dentro de [discount_from, discount_to]"""
        if self.discount_price is None or not self.discount_from or not self.discount_to:
            return False
        return self.discount_from <= timezone.now() <= self.discount_to

    @property
    def current_price(self):
        return self.discount_price if self.has_discount else self.price

    @property
    def is_available(self):
        """Producto disponible para compra"""
        return self.is_active and self.stock > 0

    @property
    def primary_image(self):
        images = list(self.images.all())
        for image in images:
            if image.is_primary:
                return image
        return images[0] if images else None

    def increment_views(self):
        """Incrementar contador de vistas"""
        Product.objects.filter(pk=self.pk).update(views_count=models.F('views_count') + 1)
        self.views_count += 1

    def decrement_stock(self, quantity=1):
        """Decrementar stock después de venta"""
        if self.stock >= quantity:
            self.stock -= quantity
            self.sales_count += quantity
            self.save(update_fields=['stock', 'sales_count'])
            return True
        return False

    def restore_stock(self, quantity):
        """Devolver stock de un pedido cancelado"""
        self.stock += quantity
        self.sales_count = max(0, self.sales_count - quantity)
        self.save(update_fields=['stock', 'sales_count'])


#-----Product Image Model-----
class ProductImage(models.Model):
    product = models.ForeignKey(Product, related_name='images', on_delete=models.CASCADE)
    # ruta relativa a MEDIA_URL o URL absoluta
    image = models.CharField(max_length=500)
    alt_text = models.CharField(max_length=200, blank=True)
    is_primary = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Product Image"
        verbose_name_plural = "Product Images"
        ordering = ['-is_primary', 'order', 'created_at']

    def save(self, *args, **kwargs):
        # Solo una imagen puede ser primaria por producto
        if self.is_primary and self.product_id:
            qs = ProductImage.objects.filter(product_id=self.product_id, is_primary=True)
            if self.pk:
                qs = qs.exclude(pk=self.pk)
            qs.update(is_primary=False)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Image for {self.product.name} ({'Primary' if self.is_primary else 'Gallery'})"
