import logging

from django.conf import settings
from django.db import models, transaction

from core.conf import store_setting

from .pricing import ZERO, calculate_totals, money

logger = logging.getLogger(__name__)

# =============================================================================
# E-COMMERCE ARCHITECTURE: Shopping Cart
# =============================================================================
# STATUS: Completo
# PURPOSE: Un carrito por cliente autenticado
# BUSINESS LOGIC:
# - Misma combinación producto + opciones se acumula en una sola línea
# - Precio unitario congelado al agregar (precio vigente con descuento)
# - Totales: subtotal + impuesto + envío - descuento, nunca negativo
# =============================================================================


class CartError(ValueError):
    """Operación de carrito inválida (stock, cantidad, producto inactivo)"""


class Cart(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, related_name='cart', on_delete=models.CASCADE)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    shipping = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Cart of {self.user.email}"

    @classmethod
    def for_user(cls, user):
        cart, _ = cls.objects.get_or_create(user=user)
        return cart

    @property
    def item_count(self):
        return self.items.aggregate(count=models.Sum('quantity'))['count'] or 0

    @property
    def is_empty(self):
        return not self.items.exists()

    def calculate_totals(self):
        subtotal = self.items.aggregate(value=models.Sum('total_price'))['value'] or ZERO
        totals = calculate_totals(subtotal, self.discount)
        for field, value in totals.items():
            setattr(self, field, value)
        self.save(update_fields=list(totals) + ['updated_at'])
        return self

    def _validate_quantity(self, product, quantity):
        max_quantity = store_setting('MAX_QUANTITY_PER_ITEM')
        if quantity < 1 or quantity > max_quantity:
            raise CartError(f"Quantity must be between 1 and {max_quantity}")
        if not product.is_active:
            raise CartError(f"'{product.name}' is not available")
        if product.stock < quantity:
            raise CartError(f"Only {product.stock} units of '{product.name}' in stock")

    @transaction.atomic
    def add_item(self, product, quantity=1, product_options=None):
        """Agrega un producto; si ya existe con las mismas opciones suma la cantidad"""
        options = product_options or {}
        existing = next(
            (item for item in self.items.filter(product=product) if item.product_options == options),
            None,
        )
        if existing:
            new_quantity = existing.quantity + quantity
            self._validate_quantity(product, new_quantity)
            existing.set_quantity(new_quantity)
            item = existing
        else:
            self._validate_quantity(product, quantity)
            unit_price = money(product.current_price)
            item = self.items.create(
                product=product,
                quantity=quantity,
                unit_price=unit_price,
                total_price=money(unit_price * quantity),
                product_options=options,
            )
        self.calculate_totals()
        logger.debug("Cart %s: added %s x product %s", self.pk, quantity, product.pk)
        return item

    def get_item(self, item_id):
        try:
            return self.items.select_related('product').get(pk=item_id)
        except CartItem.DoesNotExist:
            raise CartError("Item not found in cart") from None

    @transaction.atomic
    def update_item_quantity(self, item_id, quantity):
        """Cantidad 0 elimina la línea; devuelve el item o None si se eliminó"""
        item = self.get_item(item_id)
        if quantity <= 0:
            self.remove_item(item_id)
            return None
        self._validate_quantity(item.product, quantity)
        item.set_quantity(quantity)
        self.calculate_totals()
        return item

    @transaction.atomic
    def remove_item(self, item_id):
        self.get_item(item_id).delete()
        self.calculate_totals()
        return self

    @transaction.atomic
    def clear(self):
        self.items.all().delete()
        self.discount = ZERO
        self.calculate_totals()
        return self


class CartItem(models.Model):
    cart = models.ForeignKey(Cart, related_name='items', on_delete=models.CASCADE)
    product = models.ForeignKey('products.Product', related_name='cart_items', on_delete=models.CASCADE)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    # {'color': id, 'size': id}
    product_options = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.product.name}"

    def set_quantity(self, quantity):
        self.quantity = quantity
        self.total_price = money(self.unit_price * quantity)
        self.save(update_fields=['quantity', 'total_price', 'updated_at'])
