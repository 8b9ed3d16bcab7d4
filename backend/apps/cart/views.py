from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Cart, CartError
from .serializers import (
    AddToCartSerializer,
    CartItemSerializer,
    CartSerializer,
    RemoveCartItemSerializer,
    UpdateCartItemSerializer,
    cart_summary,
)

# =============================================================================
# CART ENDPOINTS - Requieren cliente autenticado
# =============================================================================
# El frontend pide login antes de agregar al carrito y ejecuta la acción
# pendiente en cuanto el usuario se autentica.


def _cart_for(request):
    return Cart.for_user(request.user)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cart_detail(request):
    """Contenido del carrito con totales"""
    cart = _cart_for(request)
    serializer = CartSerializer(cart, context={'request': request})
    return Response({'cart': serializer.data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_add(request):
    """Agregar producto al carrito"""
    serializer = AddToCartSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    cart = _cart_for(request)
    data = serializer.validated_data
    try:
        item = cart.add_item(data['product'], data['quantity'], data['product_options'])
    except CartError as exc:
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Product added to cart',
        'item': CartItemSerializer(item, context={'request': request}).data,
        'cart_summary': cart_summary(cart),
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_update(request):
    """Actualizar cantidad; 0 elimina el item"""
    serializer = UpdateCartItemSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    cart = _cart_for(request)
    try:
        item = cart.update_item_quantity(
            serializer.validated_data['item_id'],
            serializer.validated_data['quantity'],
        )
    except CartError as exc:
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Cart updated' if item else 'Item removed from cart',
        'cart_summary': cart_summary(cart),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_remove(request):
    """Eliminar item del carrito"""
    serializer = RemoveCartItemSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    cart = _cart_for(request)
    try:
        cart.remove_item(serializer.validated_data['item_id'])
    except CartError as exc:
        return Response({'error': str(exc)}, status=status.HTTP_404_NOT_FOUND)

    return Response({
        'message': 'Item removed from cart',
        'cart_summary': cart_summary(cart),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_clear(request):
    """Vaciar el carrito"""
    cart = _cart_for(request).clear()
    return Response({
        'message': 'Cart cleared',
        'cart_summary': cart_summary(cart),
    })
