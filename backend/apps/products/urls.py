from django.urls import path
from . import views

# =============================================================================
# E-COMMERCE ARCHITECTURE: Catalog URL Structure
# =============================================================================
# STATUS: Completo
# PURPOSE: Endpoints públicos del catálogo
# BUSINESS LOGIC: La gestión del catálogo se hace desde el admin de Django
# =============================================================================

urlpatterns = [
    path('', views.public_list_products, name='product-list'),                 # GET: Lista pública de productos
    path('latest/', views.latest_products, name='product-latest'),             # GET: Últimos productos
    path('gifts/', views.public_gift_products, name='product-gifts'),          # GET: Productos de regalo
    path('categories/', views.public_category_list, name='category-list'),     # GET: Lista de categorías
    path('nav-categories/', views.nav_categories, name='nav-category-list'),   # GET: Categorías del menú
    path('colors/', views.public_color_list, name='color-list'),               # GET: Colores
    path('sizes/', views.public_size_list, name='size-list'),                  # GET: Tallas
    path('<int:pk>/favorite/', views.product_favorite, name='product-favorite'), # GET/POST: Estado / alternar favorito
    path('<slug:slug>/', views.public_product_detail, name='product-detail'),  # GET: Detalle de producto por slug
]
