from django.urls import path
from . import views

urlpatterns = [
    path('', views.cart_detail, name='cart-detail'),        # GET: Carrito actual
    path('add/', views.cart_add, name='cart-add'),          # POST: Agregar producto
    path('update/', views.cart_update, name='cart-update'), # POST: Cambiar cantidad
    path('remove/', views.cart_remove, name='cart-remove'), # POST: Eliminar item
    path('clear/', views.cart_clear, name='cart-clear'),    # POST: Vaciar carrito
]
