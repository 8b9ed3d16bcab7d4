import logging
from decimal import Decimal, InvalidOperation

from django.db.models import Count, Prefetch, Q
from django.shortcuts import get_object_or_404
from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from core.conf import store_setting

from .models import Category, Color, Product, ProductImage, Size
from .serializers import (
    CategorySerializer,
    ColorSerializer,
    NavCategorySerializer,
    ProductDetailSerializer,
    ProductSerializer,
    SizeSerializer,
)

logger = logging.getLogger(__name__)


class ProductPagination(PageNumberPagination):
    """Paginacion personalizada para productos"""
    page_size = 12 #productos por pagina
    page_size_query_param = 'page_size' # parametro que cambia el tamano de la pagina
    max_page_size = 50 # maximo tamano de pagina


VALID_ORDERINGS = {
    'price': 'price',
    '-price': '-price',
    'created_at': 'created_at',
    '-created_at': '-created_at',
    'sales': '-sales_count',  # Más vendidos
    'views': '-views_count',  # Más vistos
    'name': 'name',
    '-name': '-name',
}


def _id_list(raw):
    """'1,2,x' -> [1, 2]; valores no numéricos se ignoran"""
    ids = []
    for part in (raw or '').split(','):
        part = part.strip()
        if part.isdigit():
            ids.append(int(part))
    return ids


def _decimal_or_none(raw):
    try:
        value = Decimal(raw)
    except (InvalidOperation, TypeError):
        return None
    # NaN e Infinity no sirven como filtro de precio
    return value if value.is_finite() else None


def catalog_queryset():
    """Productos visibles en la tienda con sus relaciones precargadas"""
    return Product.objects.active().select_related('category').prefetch_related(
        Prefetch('images', queryset=ProductImage.objects.order_by('-is_primary', 'order', 'created_at')),
    )


def filter_products(queryset, params):
    """
    Aplica los filtros de la tienda sobre el queryset.

    - category, color, size: ids separados por coma
    - price: rango 'min-max'; min_price / max_price sueltos
    - search: texto en nombre, descripción o categoría
    - gift: 'true' / 'false'
    """
    category_ids = _id_list(params.get('category'))
    if category_ids:
        queryset = queryset.filter(category_id__in=category_ids)

    color_ids = _id_list(params.get('color'))
    if color_ids:
        queryset = queryset.filter(colors__id__in=color_ids)

    size_ids = _id_list(params.get('size'))
    if size_ids:
        queryset = queryset.filter(sizes__id__in=size_ids)

    price_range = params.get('price')
    if price_range:
        bounds = price_range.split('-')
        if len(bounds) == 2:
            low, high = _decimal_or_none(bounds[0]), _decimal_or_none(bounds[1])
            if low is not None and high is not None:
                queryset = queryset.filter(price__range=(low, high))

    # Filtro de rango de precios
    min_price = _decimal_or_none(params.get('min_price'))
    if min_price is not None:
        queryset = queryset.filter(price__gte=min_price)

    max_price = _decimal_or_none(params.get('max_price'))
    if max_price is not None:
        queryset = queryset.filter(price__lte=max_price)

    gift = params.get('gift')
    if gift is not None and gift.lower() in ('true', 'false'):
        queryset = queryset.filter(is_gift=gift.lower() == 'true')

    # Búsqueda de texto
    search = params.get('search')
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(name_ar__icontains=search) |
            Q(description__icontains=search) |
            Q(category__name__icontains=search)
        )

    if color_ids or size_ids:
        queryset = queryset.distinct()

    ordering = params.get('ordering', '-created_at')
    return queryset.order_by(VALID_ORDERINGS.get(ordering, '-created_at'))


def _paginated_products(request, queryset):
    paginator = ProductPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = ProductSerializer(page, many=True, context={'request': request})
    return paginator.get_paginated_response({
        'products': serializer.data,
        'total_count': paginator.page.paginator.count,
    })


# =============================================================================
# CUSTOMER ENDPOINTS - APIs Públicas
# =============================================================================
# - Cualquier usuario navega el catálogo sin autenticación
# - Solo productos activos de categorías activas

@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_list_products(request):
    """
    Lista pública de productos activos
    """
    queryset = filter_products(catalog_queryset(), request.GET)
    return _paginated_products(request, queryset)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_gift_products(request):
    """Productos marcados como regalo"""
    queryset = filter_products(catalog_queryset().gifts(), request.GET)
    return _paginated_products(request, queryset)


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def latest_products(request):
    """Últimos productos agregados"""
    limit = store_setting('LATEST_PRODUCTS_LIMIT')
    products = catalog_queryset().order_by('-created_at')[:limit]
    serializer = ProductSerializer(products, many=True, context={'request': request})
    return Response({'products': serializer.data})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_product_detail(request, slug):
    """
    Detalle público de producto por slug

    BUSINESS LOGIC:
    - Solo productos activos
    - Incrementa views_count automáticamente
    - Incluye colores, tallas y todas las imágenes
    """
    product = get_object_or_404(
        catalog_queryset().prefetch_related('colors', 'sizes'),
        slug=slug,
    )
    product.increment_views() # Incrementar contador de vistas
    serializer = ProductDetailSerializer(product, context={'request': request})

    return Response({'product': serializer.data})


@api_view(['GET', 'POST'])
@permission_classes([permissions.IsAuthenticatedOrReadOnly])
def product_favorite(request, pk):
    """
    GET: si el producto está en favoritos del usuario (false para anónimos)
    POST: añade o quita el producto de favoritos
    """
    product = get_object_or_404(Product.objects.active(), pk=pk)

    if request.method == 'GET':
        is_favorite = request.user.is_authenticated and request.user.has_favorite(product)
        return Response({'product_id': product.id, 'is_favorite': is_favorite})

    is_favorite = request.user.toggle_favorite(product)
    logger.info("User %s %s product %s", request.user.id, 'favorited' if is_favorite else 'unfavorited', product.id)
    return Response({
        'product_id': product.id,
        'is_favorite': is_favorite,
        'favorites_count': request.user.favorites.count(),
    })


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_category_list(request):
    """Lista pública de categorías activas"""
    categories = Category.objects.filter(is_active=True).annotate(
        active_product_count=Count('products', filter=Q(products__is_active=True))
    ).order_by('name')

    serializer = CategorySerializer(categories, many=True)
    return Response({
        'categories': serializer.data,
        'total_count': len(serializer.data)
    })


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def nav_categories(request):
    """Lista ligera de categorías para el menú de navegación"""
    categories = Category.objects.filter(is_active=True).only('id', 'name', 'name_ar', 'slug')
    return Response({'categories': NavCategorySerializer(categories, many=True).data})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_color_list(request):
    colors = Color.objects.all()
    serializer = ColorSerializer(colors, many=True, context={'request': request})
    return Response({'colors': serializer.data})


@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def public_size_list(request):
    sizes = Size.objects.all()
    return Response({'sizes': SizeSerializer(sizes, many=True).data})
