import re

from django.contrib.auth.models import AbstractUser
from django.db import models

# =============================================================================
# E-COMMERCE ARCHITECTURE: Customer Accounts
# =============================================================================
# STATUS: Completo
# PURPOSE: Cuentas de clientes de la tienda y administradores del back-office
# BUSINESS LOGIC:
# - Customers: navegan, llenan el carrito y hacen pedidos
# - Admins: gestionan catálogo y pedidos desde el admin de Django
# - Login con email, username o teléfono
# =============================================================================


def normalize_phone(value):
    """Deja solo dígitos y un '+' inicial ('+966 55-123' -> '+96655123')."""
    if not value:
        return ''
    digits = re.sub(r'[^\d+]', '', value)
    digits = digits[0] + digits[1:].replace('+', '') if digits else ''
    if digits and not digits.startswith('+'):
        digits = '+' + digits
    return digits


class User(AbstractUser):
    ROLE_CHOICES = [
        ('admin', 'Admin'),
        ('customer', 'Customer'),
    ]
    # Campos principales
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='customer')
    phone = models.CharField(max_length=20, unique=True, blank=True, null=True)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    favorites = models.ManyToManyField('products.Product', related_name='favorited_by', blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Configuración de autenticación
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def save(self, *args, **kwargs):
        # '' no puede repetirse en un campo unique: se guarda como NULL
        self.phone = normalize_phone(self.phone) or None
        super().save(*args, **kwargs)

    def __str__(self):
        return f'{self.email} ({self.get_role_display()})'

    @property
    def is_admin(self):
        return self.role == 'admin' or self.is_superuser

    @property
    def is_customer(self):
        return self.role == 'customer'

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self):
        """Nombre para mostrar en la tienda"""
        return self.full_name or self.username

    def has_favorite(self, product):
        return self.favorites.filter(pk=product.pk).exists()

    def toggle_favorite(self, product):
        """Añade o quita el producto de favoritos; devuelve el estado nuevo"""
        if self.has_favorite(product):
            self.favorites.remove(product)
            return False
        self.favorites.add(product)
        return True

    def can_manage_store(self):
        """Verifica si puede gestionar catálogo y pedidos"""
        return self.is_admin and self.is_active
