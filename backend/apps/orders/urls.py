from django.urls import path
from . import views

urlpatterns = [
    path('', views.order_list, name='order-list'),                                          # GET: Mis pedidos
    path('checkout/', views.checkout, name='checkout'),                                     # GET: resumen / POST: crear pedido
    path('payment-methods/', views.payment_methods, name='payment-methods'),                # GET: Métodos de pago
    path('<str:order_number>/', views.order_detail, name='order-detail'),                   # GET: Detalle del pedido
    path('<str:order_number>/cancel/', views.order_cancel, name='order-cancel'),            # POST: Cancelar pedido
]
