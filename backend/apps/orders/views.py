from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from apps.cart.models import Cart
from apps.cart.serializers import CartSerializer
from apps.users.permissions import IsOwnerOrAdmin
from core.conf import store_setting

from .models import Order
from .serializers import CheckoutSerializer, OrderDetailSerializer, OrderListSerializer
from .services import CheckoutError, cancel_order, place_order


class OrderPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 50


PAYMENT_METHODS = [
    {
        'id': 'cash_on_delivery',
        'name': 'Cash on Delivery',
        'description': 'Pay when you receive your order',
        'fee': '0.00',
        'available': True,
    },
    {
        'id': 'credit_card',
        'name': 'Credit Card',
        'description': 'Pay securely using your credit card',
        'fee': '0.00',
        'available': True,
    },
    {
        'id': 'bank_transfer',
        'name': 'Bank Transfer',
        'description': 'Transfer the amount to our bank account',
        'fee': '0.00',
        'available': True,
    },
]


def _get_order(request, order_number):
    order = get_object_or_404(
        Order.objects.prefetch_related('items__product'),
        order_number=order_number,
    )
    # 404 en lugar de 403 para no revelar pedidos ajenos
    if not IsOwnerOrAdmin().has_object_permission(request, None, order):
        return None
    return order


# =============================================================================
# CHECKOUT ENDPOINTS
# =============================================================================

@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def checkout(request):
    """
    GET: resumen del carrito para el checkout
    POST: crea el pedido desde el carrito
    """
    if request.method == 'GET':
        cart = Cart.for_user(request.user).calculate_totals()
        return Response({
            'cart': CartSerializer(cart, context={'request': request}).data,
            'tax_rate': str(store_setting('TAX_RATE')),
            'free_shipping_threshold': str(store_setting('FREE_SHIPPING_THRESHOLD')),
            'payment_methods': PAYMENT_METHODS,
        })

    serializer = CheckoutSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        order = place_order(
            request.user,
            shipping=serializer.shipping_fields(),
            payment_method=serializer.validated_data['payment_method'],
            notes=serializer.validated_data['notes'],
        )
    except CheckoutError as exc:
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Order placed successfully',
        'order': {
            'id': order.id,
            'order_number': order.order_number,
            'total': str(order.total),
            'status': order.status,
            'estimated_delivery': order.estimated_delivery.isoformat(),
        },
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([AllowAny])
def payment_methods(request):
    return Response({'payment_methods': PAYMENT_METHODS})


# =============================================================================
# ORDER ENDPOINTS - Pedidos del cliente
# =============================================================================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_list(request):
    """Pedidos del usuario autenticado, más recientes primero"""
    queryset = Order.objects.filter(user=request.user).prefetch_related('items')

    status_filter = request.GET.get('status')
    if status_filter:
        queryset = queryset.filter(status=status_filter)

    paginator = OrderPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = OrderListSerializer(page, many=True)
    return paginator.get_paginated_response({'orders': serializer.data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_detail(request, order_number):
    order = _get_order(request, order_number)
    if order is None:
        return Response({'error': 'Order not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response({'order': OrderDetailSerializer(order).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def order_cancel(request, order_number):
    """Cancelar pedido dentro del límite de tiempo"""
    order = _get_order(request, order_number)
    if order is None:
        return Response({'error': 'Order not found'}, status=status.HTTP_404_NOT_FOUND)

    try:
        order = cancel_order(order)
    except CheckoutError as exc:
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Order cancelled successfully',
        'order': OrderDetailSerializer(order).data,
    })
