"""
Formato de imágenes de producto para las respuestas de la API.

Toda respuesta con productos expone `main_image`, `gallery_images` y
`total_images`; las rutas relativas se resuelven contra MEDIA_URL y, si hay
request, se convierten en URLs absolutas.
"""

from django.conf import settings

from core.conf import store_setting


def absolute_media_url(path, request=None):
    if not path:
        return None
    if path.startswith(('http://', 'https://', '//')):
        return path
    url = path if path.startswith('/') else f"{settings.MEDIA_URL.rstrip('/')}/{path}"
    if request is not None:
        return request.build_absolute_uri(url)
    return url


def format_image(image, request=None):
    return {
        'id': image.id,
        'url': absolute_media_url(image.image, request),
        'alt_text': image.alt_text,
        'is_primary': image.is_primary,
        'order': image.order,
    }


def format_product_images(product, request=None):
    """Imagen principal, galería y total para un producto"""
    images = list(product.images.all())
    main = next((image for image in images if image.is_primary), None)
    if main is None and images:
        main = images[0]
    gallery = [image for image in images if image is not main]
    return {
        'main_image': format_image(main, request) if main else None,
        'gallery_images': [format_image(image, request) for image in gallery],
        'total_images': len(images),
    }


def product_thumbnail_url(product, request=None):
    """URL de una sola imagen, con placeholder si el producto no tiene imágenes"""
    image = product.primary_image
    path = image.image if image else store_setting('PLACEHOLDER_IMAGE')
    return absolute_media_url(path, request)


class ProductImagesMixin:
    """Mixin para serializers de producto: agrega los campos de imagen formateados"""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(format_product_images(instance, self.context.get('request')))
        return data
